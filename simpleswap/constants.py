"""Pool constants.

Centralizes fixed-point scaling and well-known addresses.
"""

# Fixed-point scale for get_price (1e18, same as ERC-20 18-decimal units)
PRICE_SCALE = 10**18

# Share token metadata (matches the deployed LiquidityProvider token)
SHARE_TOKEN_NAME = "LiquidityProvider"
SHARE_TOKEN_SYMBOL = "LQP"

# Sepolia deployment used as the service defaults
DEFAULT_POOL_ADDRESS = "0x2debff655d680d528f69449665bfda617d544241"
DEFAULT_TOKEN_A = "0x2d2b2c2af6f4f87e722e064dcd9fdd3f94ce7597"
DEFAULT_TOKEN_B = "0xe7318ea312ee8b8faad947136f4c1b0d75484667"
