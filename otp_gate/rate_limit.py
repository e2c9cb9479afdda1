"""
Rate limiting configuration using slowapi.

Per-IP limits in front of the per-identity OTP rules:
  • strict  – 5/min  (OTP request endpoint – prevents email spam across addresses)
  • auth    – 10/min (OTP verify endpoint – prevents brute-force across addresses)
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Named rate strings for use in @limiter.limit() decorators
STRICT = "5/minute"     # OTP request (email sending)
AUTH = "10/minute"       # OTP verification
