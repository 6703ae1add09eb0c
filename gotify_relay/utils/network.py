"""Network helpers."""

import socket


def get_local_ip() -> str:
    """Return the first non-loopback IPv4 address, or 'localhost'."""
    try:
        # UDP connect sends nothing; it only selects the outbound interface.
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("10.255.255.255", 1))
            address = sock.getsockname()[0]
    except OSError:
        return "localhost"

    if address.startswith("127."):
        return "localhost"
    return address
