DOMAIN = "watch_winder"

CONF_HOST = "host"
CONF_NAME = "name"
CONF_RESCAN_ON_REENTRY = "rescan_on_reentry"
DEFAULT_HOST = "watchwinder.local"
DEFAULT_NAME = "Watch Winder"

PLATFORMS = ["sensor", "binary_sensor", "number", "select", "switch", "button", "text"]

UPDATE_INTERVAL_SECONDS = 2
REQUEST_TIMEOUT_SECONDS = 8.0

EVENT_NOTIFICATION = f"{DOMAIN}_notification"
NOTIFY_SUCCESS = "success"
NOTIFY_ERROR = "error"

# Motor addressing (0 = every motor, start/stop only)
ALL_MOTORS = 0

TEST_DURATION_SECONDS = 3

# Firmware defaults, used until the device settings are loaded
DEFAULT_TURNS_PER_DAY = 650
DEFAULT_ACTIVE_HOURS = 12
DEFAULT_ROTATION_SECONDS = 10
DEFAULT_REST_MINUTES = 5

# Editable ranges exposed to the UI
TURNS_PER_DAY_MAX = 2000
ACTIVE_HOURS_MAX = 24
ROTATION_SECONDS_MAX = 600
REST_MINUTES_MAX = 1440

# WiFi network selector placeholders
OPTION_SCANNING = "Scanning..."
OPTION_SELECT_NETWORK = "Select network..."
