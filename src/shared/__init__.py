"""
Shared Layer - Cross-Cutting Concerns
Configuration-aware logging, error contract, HTTP plumbing and domain contracts
"""
