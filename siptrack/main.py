import logging
import socket

import uvicorn
from siptrack.api.api_run import app
from siptrack.utilities.config import APP_HOST, APP_PORT, LOG_LEVEL


def get_local_ip() -> str:
    """Return the LAN address the OS would route through, or '127.0.0.1'.

    Connecting a UDP socket sends nothing; it only makes the OS pick a source IP.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        ip = str(s.getsockname()[0])
    except OSError:
        ip = "127.0.0.1"
    finally:
        s.close()
    return ip


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    local_ip = get_local_ip()
    print(f"SipTrack running on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    if local_ip not in ("127.0.0.1", "localhost"):
        print(f"Accessible from other devices at: http://{local_ip}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
