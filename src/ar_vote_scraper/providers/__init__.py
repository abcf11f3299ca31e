"""Site-specific scrapers and importers, one module per chamber."""
