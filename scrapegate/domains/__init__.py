"""Domain logic: collectors and access control."""
