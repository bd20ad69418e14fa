"""Calculator inputs, outputs and default configuration."""

from src.data.static_params import default_request

__all__ = ["default_request"]
