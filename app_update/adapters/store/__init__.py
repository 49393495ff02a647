"""App store registry: which store serves which platform, and its URLs."""

STORES = {
    "android": {
        "name": "Google Play",
        "config_field": "play_store_id",
        "market_url": "market://details?id={id}",
        "web_url": "https://play.google.com/store/apps/details?id={id}",
    },
    "ios": {
        "name": "App Store",
        "config_field": "app_store_id",
        "market_url": "itms-apps://itunes.apple.com/app/id{id}",
        "web_url": "https://apps.apple.com/app/id{id}",
    },
}

PUBLIC_LOOKUP_URL = "https://itunes.apple.com/lookup"
DEFAULT_LOOKUP_COUNTRY = "us"


def store_id_for(config, platform: str):
    store = STORES.get(platform)
    if store is None:
        return None
    return getattr(config, store["config_field"])


def store_urls(config, platform: str) -> list[str]:
    """Market URL first (opens the native store app), then the web page."""
    store_id = store_id_for(config, platform)
    if not store_id:
        return []
    store = STORES[platform]
    return [store["market_url"].format(id=store_id), store["web_url"].format(id=store_id)]
