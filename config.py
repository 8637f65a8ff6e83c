"""
Local configuration for sensitive credentials.

Do not commit real credentials here. Environment variables
with the same names take precedence over the values below.
"""

# Binance Spot API key pair. Leave empty to rely on BINANCE_API_KEY /
# BINANCE_API_SECRET from the environment.
BINANCE_API_KEY = ""
BINANCE_API_SECRET = ""

# Use https://testnet.binance.vision unless explicitly switched off.
BINANCE_TESTNET = True

# Optional override of the REST base URL (e.g. https://api1.binance.com).
BINANCE_BASE_URL = ""

# HTTP timeout (seconds) for each REST call.
BINANCE_TIMEOUT = 10.0

# Milliseconds a signed request stays valid after its timestamp (max 60000).
# None keeps the exchange default of 5000.
BINANCE_RECV_WINDOW = None
