"""
Test Services Package
Tests for adherence, schedule, suggestion and tracker services
"""
