"""
Search Provider Registry.
"""
from explorer.fetching.providers.pubmed import PubMedProvider

# Registry of available provider classes
PROVIDER_REGISTRY = {
    "pubmed": PubMedProvider,
}
