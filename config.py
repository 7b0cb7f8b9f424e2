"""Configuration for the FRITZ!Box metrics exporter"""
from pathlib import Path
from typing import List, Literal, Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings


DEFAULT_HOST = "fritz.box"
DEFAULT_PORT = 49000


class Config(BaseSettings):
    """Configuration class with Pydantic validation and environment-based settings"""
    
    # Device settings
    host: str = Field(default=DEFAULT_HOST, description="Device host name or address")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535, description="Device UPnP port, 0 selects the default")
    username: str = Field(default="", description="Device user name")
    password: str = Field(default="", description="Device password")
    catalog_loader: str = Field(default="", description="Service catalog loader as module:callable")
    
    # Collection settings
    collection_interval: int = Field(default=30, ge=1, description="Collection interval in seconds")
    service_load_retry_seconds: int = Field(default=60, ge=1, description="Wait before reloading services after a failed poll")
    enabled_collectors_str: str = Field(
        default="simple,complex",
        description="Enabled collectors (comma-separated)"
    )
    
    # Server settings
    metrics_port: int = Field(default=9100, ge=1, le=65535, description="Metrics server port")
    metrics_host: str = Field(default="0.0.0.0", description="Metrics server host")
    prometheus_file: Optional[Path] = Field(default=None, description="Optional Prometheus metrics file path")
    
    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")
    
    # Service settings
    service_name: str = Field(default="fritzbox-exporter", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")
    
    class Config:
        env_prefix = "FRITZBOX_"
        case_sensitive = False
    
    @validator('prometheus_file', 'log_file')
    def ensure_parent_directories(cls, v):
        """Ensure parent directories exist for file paths"""
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v
    
    @property
    def enabled_collectors(self) -> List[str]:
        """Get enabled collectors as a list"""
        return [item.strip() for item in self.enabled_collectors_str.split(',') if item.strip()]
    
    def is_collector_enabled(self, collector_name: str) -> bool:
        """Check if a specific collector is enabled"""
        return collector_name in self.enabled_collectors
    
    def effective_host(self) -> str:
        """Configured host, falling back to the default when empty"""
        return self.host or DEFAULT_HOST
    
    def effective_port(self) -> int:
        """Configured port, falling back to the default when zero"""
        return self.port or DEFAULT_PORT
