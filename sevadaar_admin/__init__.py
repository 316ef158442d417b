"""Operator tooling for provisioning Sevadaar admin accounts."""
