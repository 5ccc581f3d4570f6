"""Schemas — pydantic response models for the inspection API."""
