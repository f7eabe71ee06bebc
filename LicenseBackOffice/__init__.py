"""
License back-office Django project.
"""
