"""
Rate limiting for the public guest endpoints
"""

import time
from collections import defaultdict

from fastapi import Request

from table_manager.core.config import settings

# Simple in-memory rate limiter
rate_limiter = defaultdict(list)

def _evict_idle(minute_ago: float) -> None:
    """Forget clients with no request inside the window"""
    idle = [ip for ip, times in rate_limiter.items() if not times or times[-1] <= minute_ago]
    for ip in idle:
        del rate_limiter[ip]

def rate_limit_check(client_ip: str, limit: int = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE
    
    current_time = time.time()
    minute_ago = current_time - 60
    
    # Clean old requests
    _evict_idle(minute_ago)
    rate_limiter[client_ip] = [
        req_time for req_time in rate_limiter[client_ip] 
        if req_time > minute_ago
    ]
    
    if len(rate_limiter[client_ip]) >= limit:
        return False
    
    rate_limiter[client_ip].append(current_time)
    return True

def get_client_ip(request: Request) -> str:
    """Extract client IP from request"""
    # Reverse proxy headers first
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    
    return request.client.host if request.client else "unknown"
