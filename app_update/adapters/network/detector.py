"""Network type detection from interface names via psutil."""

import logging

import psutil

from app_update.domain.model import ConnectionType
from app_update.domain.ports import NetworkPort

logger = logging.getLogger("app_update.network")

WIFI_KEYWORDS = ("wi-fi", "wifi", "wlan", "wireless", "wlp", "airport")
CELLULAR_KEYWORDS = ("rmnet", "wwan", "pdp_ip", "ccmni")
LAN_KEYWORDS = ("ethernet", "eth", "enp", "eno", "ens")


def classify_interface(name: str) -> ConnectionType:
    name_lower = name.lower()
    if any(kw in name_lower for kw in WIFI_KEYWORDS):
        return ConnectionType.WIFI
    if any(kw in name_lower for kw in CELLULAR_KEYWORDS):
        return ConnectionType.CELLULAR
    if any(kw in name_lower for kw in LAN_KEYWORDS):
        return ConnectionType.LAN
    return ConnectionType.UNKNOWN


class PsutilNetworkDetector(NetworkPort):
    """WiFi wins over any other active interface."""

    def connection_type(self) -> ConnectionType:
        try:
            stats = psutil.net_if_stats()
        except Exception as e:
            logger.warning("Network detection failed: %s", e)
            return ConnectionType.UNKNOWN

        found = ConnectionType.UNKNOWN
        for iface_name, iface_stats in stats.items():
            if not iface_stats.isup:
                continue
            kind = classify_interface(iface_name)
            if kind == ConnectionType.WIFI:
                return kind
            if found == ConnectionType.UNKNOWN:
                found = kind
        return found
