"""
Example: Recording visitor addresses in a FastAPI app behind a load balancer

Run with:
    uvicorn examples.fastapi_example:app

Then:
    curl -H "X-Forwarded-For: 203.0.113.7, 198.51.100.1" http://localhost:8000/
"""

import logging

from fastapi import Depends, FastAPI, Request

from visitorip import ResolverConfig, configure_logging
from visitorip.integrations.fastapi import (
    ForwardedAddressMiddleware,
    visitor_ip_dependency,
)

# Surface "header does not store a valid IP address" warnings
configure_logging(logging.WARNING)

# One trusted hop in front of the load balancer: pin the first address
config = ResolverConfig(header_name="X-Forwarded-For", header_ip_index=0)

app = FastAPI()
app.add_middleware(ForwardedAddressMiddleware, config=config)

visitor_ip = visitor_ip_dependency(default="unknown")


@app.get("/")
async def index(request: Request):
    visit = request.state.visit
    return {"ip": visit.ip_string, "ip_bytes": visit.ip.hex() if visit.ip else None}


@app.get("/whoami")
async def whoami(ip: str = Depends(visitor_ip)):
    return {"ip": ip}


@app.get("/health")
async def health():
    return {"status": "healthy"}
