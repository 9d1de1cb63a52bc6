"""
Code Architect

AI coding assistant core: project context distillation, multi-provider
streaming inference and file-action materialization.
"""

__version__ = "2.0.0"
