from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared limiter; server.py installs it as app.state.limiter
limiter = Limiter(key_func=get_remote_address)
