"""Shared data types, config-string decoding and utility functions."""