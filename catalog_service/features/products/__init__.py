"""Product catalog feature: domain, stores, service and HTTP surfaces."""
