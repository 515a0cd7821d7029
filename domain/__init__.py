"""
Value types, enums, label table and exceptions
"""
