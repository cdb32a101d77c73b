"""LINSTOR controller discovery."""

from kubelinstor.controllers.discovery.locator import ControllerLocator

__all__ = ["ControllerLocator"]
