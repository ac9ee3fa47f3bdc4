"""
API blueprints for Stampcard.
"""
