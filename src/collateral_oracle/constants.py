"""Storage keys and numeric constants."""

CONFIG_KEY = "config"
COLLATERAL_ASSET_PREFIX = "collateral_asset:"

# Band Protocol reference rates are integers at 1e18
BAND_RATE_DECIMALS = 18

DEFAULT_QUERY_TIMEOUT = 10.0
LCD_SMART_QUERY_PATH = "/cosmwasm/wasm/v1/contract/{contract}/smart/{query}"
