"""
Ajanvaraus booking backend
"""
