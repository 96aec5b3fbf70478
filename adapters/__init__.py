"""
Adapters package - Clients for external services (nutrition database,
AI recipe parser, network reachability).
"""

from adapters.oauth1 import OAuth1Signer
from adapters.nutrition_api_client import NutritionAPIClient
from adapters.recipe_parser import AIRecipeParser
from adapters.network_monitor import NetworkMonitor

__all__ = [
    "OAuth1Signer",
    "NutritionAPIClient",
    "AIRecipeParser",
    "NetworkMonitor",
]
