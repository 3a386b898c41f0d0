"""Constants for SwampDoge Sync.

Timing values are fixed and are not read from configuration.
"""

# SwampDoge token mint
SWAMP_MINT = "GXnNG5q32mmcpVmNAKKUf1WTSqNxoVKJyho6jQT4pump"
NATIVE_SYMBOL = "SOL"
TOKEN_SYMBOL = "SDOGE"

# Default endpoints
DEFAULT_RPC_URL = "https://rpc.ankr.com/solana"
DEFAULT_MARKET_DATA_URL = "https://api.dexscreener.com/latest/dex/tokens"
DEFAULT_PRICE_URL = "https://price.jup.ag/v4/price"

# Timing (milliseconds)
FETCH_TIMEOUT_MS = 8_000
COOLDOWN_MS = 8_000
POLL_INTERVAL_MS = 60_000

# History / chart
HISTORY_CAPACITY = 60
CHART_WINDOW = 24
MIN_CHART_POINTS = 3
CHART_RANGE_FLOOR = 1e-12

# Holders
HOLDER_LIMIT = 15

# 1 SOL = 10^9 lamports
LAMPORTS_PER_SOL = 1_000_000_000

# Number of picks on the picks form
PICK_SLOTS = 4

# Deep links
DEXSCREENER_URL = "https://dexscreener.com/solana/{mint}"
PUMP_FUN_URL = "https://pump.fun/coin/{mint}"
JUPITER_SWAP_URL = "https://jup.ag/swap/SOL-{mint}"
SOLSCAN_ACCOUNT_URL = "https://solscan.io/account/{address}"

USER_AGENT = "swampdoge-sync/0.1"

# Undismissed notices kept before the oldest is dropped
MAX_PENDING_NOTICES = 50
