import sys
import uvicorn
from gelato_ops.core.config import settings

def run_https():
    """Serve over TLS with the configured certificate pair"""
    print("🔒 Starting HTTPS server on port 9105...")
    uvicorn.run(
        "gelato_ops.main:app",
        host="0.0.0.0",
        port=9105,
        reload=False,
        ssl_certfile=settings.SSL_CERTFILE,
        ssl_keyfile=settings.SSL_KEYFILE,
    )

def run_http():
    print("🚀 Starting HTTP server on port 9106...")
    uvicorn.run(
        "gelato_ops.main:app",
        host="0.0.0.0",
        port=9106,
        reload=settings.DEBUG,
    )

if __name__ == "__main__":
    if "--https" in sys.argv:
        if not (settings.SSL_CERTFILE and settings.SSL_KEYFILE):
            sys.exit("SSL_CERTFILE and SSL_KEYFILE must be set to serve HTTPS")
        run_https()
    else:
        run_http()
