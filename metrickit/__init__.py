"""Building blocks for metrics recorders: keys, registries, handles, buckets, histograms, summaries, recency tracking and layers."""

__version__ = "0.1.0"