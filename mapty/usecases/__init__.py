"""Use-case layer wrapping ports for the app controller.

Each module adapts one port call into a user-presentable outcome without
performing I/O directly, preserving MVVM + Hexagonal boundaries.
"""
