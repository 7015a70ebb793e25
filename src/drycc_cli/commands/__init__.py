"""Command runner: one mixin per command family on a shared base."""

from ._base import BaseCommand
from .apps import AppsMixin
from .auth import AuthMixin
from .builds import BuildsMixin
from .config import ConfigMixin
from .misc import MiscMixin
from .ps import PsMixin
from .routing import RoutingMixin
from .settings import SettingsMixin
from .volumes import VolumesMixin


class DryccCmd(
    AppsMixin,
    AuthMixin,
    BuildsMixin,
    ConfigMixin,
    PsMixin,
    RoutingMixin,
    SettingsMixin,
    VolumesMixin,
    MiscMixin,
):
    """Runs every ``drycc`` subcommand against the configured controller."""


__all__ = ["BaseCommand", "DryccCmd"]
