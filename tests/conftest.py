"""
Test Configuration and Utilities

Common base classes for GraphInjection tests
"""

import unittest

from graphinjection import InstanceFactory

from fixtures import RecordingResolver


class FactoryTestCase(unittest.TestCase):
    """
    Base test case class for instance factory tests.

    Creates a fresh RecordingResolver and InstanceFactory before each test.
    Entries can be registered through ``self.resolver.entries``.
    """

    def setUp(self):
        """Create a new resolver and factory before each test"""
        self.resolver = RecordingResolver()
        self.factory = InstanceFactory(self.resolver)
