"""Infrastructure: configuration loading and probes"""
