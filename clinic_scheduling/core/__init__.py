"""
Core domain types for the clinic scheduling service.
"""
