"""
Verdict test suite.

This package contains tests for the Verdict package:
- Policy and registry tests
- Decision facade tests
- Decision session tests
- Configuration and feature gate tests
"""
