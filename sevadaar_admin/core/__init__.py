"""Core configuration and Firebase bootstrap helpers."""
