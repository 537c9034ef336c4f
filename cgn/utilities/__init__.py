"""Formatting helpers shared by models and builders."""
