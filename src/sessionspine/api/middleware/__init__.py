"""API middleware package.

Manifesto:
    Cross-cutting concerns (request correlation, error envelopes)
    belong in middleware so routers stay focused on business logic.

Tags:
    session-spine, api, middleware, cross-cutting

Doc-Types:
    api-reference
"""
