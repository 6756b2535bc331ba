"""
Services Module
Editor session registry and the persistence API client
"""
