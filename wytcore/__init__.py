"""HTTP client, Metabase data source and data models for web3 trading analytics."""

__version__ = "0.1.0"
__all__ = ["httpclient", "metabase", "okxentity", "pumpmodel"]