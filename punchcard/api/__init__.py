"""
Staff-facing JSON API blueprints.
"""
