"""otcval: valuation of resolved OTC derivative trades."""
