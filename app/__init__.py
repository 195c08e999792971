"""
Golf league application layer: achievements, season summary, config and HTTP API
"""
