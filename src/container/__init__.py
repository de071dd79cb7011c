"""Container packaging package.

Contains staging, naming, codec, and pack/unpack pipeline modules.
"""
