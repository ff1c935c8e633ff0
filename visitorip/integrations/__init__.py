"""
Framework Integrations for visitorip

Hooks the forwarded address processor into popular Python web frameworks.

Available integrations:
- FastAPI / Starlette (visitorip.integrations.fastapi)
- Sanic (visitorip.integrations.sanic)
- aiohttp (visitorip.integrations.aiohttp)
"""

__all__ = []
