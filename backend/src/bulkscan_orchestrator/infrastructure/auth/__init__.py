from .idam_client import IdamClient
from .s2s_token_generator import S2STokenGenerator

__all__ = ["IdamClient", "S2STokenGenerator"]
