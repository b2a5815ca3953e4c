"""
Session Spine - workflow definition lookup and session-time truncation.

- sessionspine.core: resolver, truncator, scheduling, reference store
- sessionspine.ops: transport-agnostic operations (OperationResult envelopes)
- sessionspine.api: FastAPI transport
- sessionspine.cli: Typer CLI
"""

__version__ = "0.1.0"

from sessionspine.core import *  # noqa
