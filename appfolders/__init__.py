"""Application data folders, monitored JSON files, rotating logs and component configs."""

__version__ = "0.1.0"
__all__ = ["config", "config_manager", "file_registry", "file_system", "folder_system"]