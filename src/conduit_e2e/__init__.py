"""Conduit E2E: a fluent page-object and network-expectation DSL for
browser and API tests of the Conduit blogging application."""

__version__ = "0.1.0"
