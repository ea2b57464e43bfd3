"""
API feature packages. Each feature folder holds its models, services and routes.
"""
