from automatch.core.config import load_matching_config

__all__ = ["load_matching_config"]
