"""Configuration management for fxpath."""
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


class EngineConfig(BaseModel):
    """Graph engine configuration."""
    # solving is cubic in the node count, warn once the graph gets this big
    large_graph_nodes: int = Field(
        default_factory=lambda: int(os.getenv("LARGE_GRAPH_NODES", "500"))
    )
    cache_solutions: bool = Field(
        default_factory=lambda: os.getenv("CACHE_SOLUTIONS", "true").lower() == "true"
    )


class LoggingConfig(BaseModel):
    """Logging sinks configuration."""
    level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    file: str = Field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    rotation: str = Field(default_factory=lambda: os.getenv("LOG_ROTATION", "1 day"))
    retention: str = Field(default_factory=lambda: os.getenv("LOG_RETENTION", "7 days"))


class Config(BaseModel):
    """Main application configuration."""
    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def log_level(self) -> str:
        return self.logging.level


# single global config instance that everything uses
config = Config()
