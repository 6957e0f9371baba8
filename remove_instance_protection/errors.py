"""Exceptions raised while inspecting and updating an auto scaling group."""
from __future__ import annotations


class RemoveProtectionError(Exception):
    """Base class for fatal errors; the command line reports these and exits non-zero."""


class InputError(RemoveProtectionError):
    """The described resources cannot be acted upon safely."""


class AutoScalingGroupNotFound(InputError):
    def __init__(self, asg_name: str) -> None:
        super().__init__(f'auto scaling group "{asg_name}" not found')
        self.asg_name = asg_name


class LaunchTemplateNotConfigured(InputError):
    def __init__(self, asg_name: str) -> None:
        super().__init__(f'auto scaling group "{asg_name}" does not use Launch Templates')
        self.asg_name = asg_name


class LaunchTemplateNotFound(InputError):
    def __init__(self, template_name: str) -> None:
        super().__init__(f"invalid describe Launch Template response for {template_name}")
        self.template_name = template_name


class NoLatestVersion(InputError):
    def __init__(self, template_name: str) -> None:
        super().__init__(f"no latest version for Launch Template {template_name}")
        self.template_name = template_name


class MissingTemplateInfo(InputError):
    """An instance has no usable launch template name or version."""

    def __init__(self, instance_id: str, detail: str = "missing Launch Template version") -> None:
        super().__init__(f"{detail} for instance id {instance_id}")
        self.instance_id = instance_id


class RemoteCallError(RemoveProtectionError):
    """A provider call failed; carries the operation and the resource it targeted."""

    def __init__(self, operation: str, target: str, cause: Exception) -> None:
        super().__init__(f"{operation} failed for {target}: {cause}")
        self.operation = operation
        self.target = target
        self.cause = cause


__all__ = [
    "AutoScalingGroupNotFound",
    "InputError",
    "LaunchTemplateNotConfigured",
    "LaunchTemplateNotFound",
    "MissingTemplateInfo",
    "NoLatestVersion",
    "RemoteCallError",
    "RemoveProtectionError",
]
