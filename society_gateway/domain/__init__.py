"""
society_gateway.domain — Canonical data models and enumerations.

This package defines the source-of-truth types shared across every layer
of the gateway. Nothing in here should import from other society_gateway
sub-packages except ``society_gateway.config`` (only stdlib otherwise).
"""
