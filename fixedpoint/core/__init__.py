"""
Core numeric representation, arithmetic engine, and interchange contracts.

This module contains the building blocks that are independent of any
harness or output channel.
"""
