"""
Domain layer: entities, value objects, pure services and interfaces.
"""
