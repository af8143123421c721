from .config import Config, MonitoringConfig, ScraperConfig, WebConfig, load_config, settings

__all__ = ["Config", "MonitoringConfig", "ScraperConfig", "WebConfig", "load_config", "settings"]
