"""
Scope Enum

Defines how long the container keeps an instance built from a definition
"""

from enum import Enum


class Scope(Enum):
    """Scope of class definitions"""
    SINGLETON = "SINGLETON"
    PROTOTYPE = "PROTOTYPE"
