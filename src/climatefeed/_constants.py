"""Internal constants shared across the library."""

USER_AGENT = "climatefeed/1.0"

TEMPERATURE_URL = "https://data.giss.nasa.gov/gistemp/tabledata_v4/GLB.Ts+dSST.json"
CO2_URL = "https://gml.noaa.gov/webdata/ccgg/trends/co2/co2_weekly_mlo.json"
SEA_LEVEL_URL = "https://api.tidesandcurrents.noaa.gov/api/prod/datagetter"

# The Battery, New York (NOAA CO-OPS station id).
SEA_LEVEL_STATION = "8454000"
SEA_LEVEL_PRODUCT = "monthly_mean"
SEA_LEVEL_DATUM = "MLLW"
SEA_LEVEL_UNITS = "metric"
SEA_LEVEL_TIME_ZONE = "gmt"
SEA_LEVEL_WINDOW_YEARS = 10
APPLICATION_NAME = "ClimateApp"

DEFAULT_FETCH_TIMEOUT: float = 10.0
DEFAULT_REFRESH_INTERVAL_HOURS: int = 6

NOT_READY_MESSAGE = "Data is being loaded, please try again in a moment"
