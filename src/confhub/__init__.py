"""confhub - categorised key-value configuration settings over HTTP."""

__version__ = "0.1.0"
