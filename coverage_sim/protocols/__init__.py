from .base import Band
from .wifi import BANDS, WIFI_2_4GHZ, WIFI_5GHZ, WIFI_6GHZ, get_band

__all__ = ["Band", "BANDS", "WIFI_2_4GHZ", "WIFI_5GHZ", "WIFI_6GHZ", "get_band"]
