from typing import Optional
from pydantic import BaseModel, Field
from .protocol import READ_LIMIT

class ServerConfig(BaseModel):
    """Battle server settings."""
    host: str = "127.0.0.1"
    port: int = Field(default=0, ge=0, le=65535)  # 0 = OS picks an ephemeral port
    tick_ms: int = Field(default=10, ge=1)
    read_limit: int = Field(default=READ_LIMIT, ge=1)
    io_timeout_s: float = Field(default=2.0, gt=0)
    log_path: str = "logging.txt"  # empty disables the diagnostic file
    seed: Optional[int] = None

class ClientConfig(BaseModel):
    """Display client settings."""
    host: str = "127.0.0.1"
    port: int = Field(ge=1, le=65535)
    poll_ms: int = Field(default=10, ge=1)
    io_timeout_s: float = Field(default=2.0, gt=0)
