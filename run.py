#!/usr/bin/env python
"""
Email OTP API development server runner.
"""

import sys
from pathlib import Path

# Add the project root to the path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

if __name__ == "__main__":
    import uvicorn
    from email_otp.core.config import settings

    print("=" * 60)
    print("Starting Email OTP API")
    print("=" * 60)
    print(f"Server:         {settings.SERVER_HOST}:{settings.SERVER_PORT}")
    print(f"Environment:    {settings.ENVIRONMENT}")
    print(f"Allowed domain: {settings.OTP_ALLOWED_DOMAIN}")
    print(f"Notifier:       {settings.NOTIFIER_BACKEND}")
    print(f"Docs URL:       http://{settings.SERVER_HOST}:{settings.SERVER_PORT}/api/docs")
    print("=" * 60)

    # Run with proper import string for reload to work
    uvicorn.run(
        "email_otp.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
