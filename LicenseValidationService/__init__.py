"""
License Validation Service Django project.
"""
