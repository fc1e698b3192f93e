"""
Fitness application.

Social fitness tracking backend. Each concept lives in its own
sub-package (tracking, pointing) with models, dependencies, router and
services.
"""
