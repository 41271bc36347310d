"""Translate domain errors into CLI errors."""

from __future__ import annotations

import click

from commerce.domain.exceptions import DomainException


def domain_error(exc: DomainException) -> click.ClickException:
    """Wrap a domain error so click prints it and exits with status 1."""
    return click.ClickException(f"[{exc.code.value}] {exc}")
