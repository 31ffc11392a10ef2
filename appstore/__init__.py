"""App store service exposing container image metadata as an app catalog."""
