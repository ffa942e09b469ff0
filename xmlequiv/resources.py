"""Loading of XML documents packaged as resources."""

import importlib.resources as resources
from types import ModuleType
from typing import Union


def get_as_string(package: Union[str, ModuleType], resource_name: str, encoding: str = "utf-8") -> str:
    """
    Reads a data file shipped inside a Python package.

    :param package: Package (module object or dotted name) that contains the resource.
    :param resource_name: Path of the resource relative to the package, using '/' as separator.
    :param encoding: Text encoding of the resource.
    :returns: Content of the resource as text.
    :raises FileNotFoundError: No such resource exists in the package.
    """

    resource = resources.files(package)
    for part in resource_name.split("/"):
        resource = resource.joinpath(part)
    return resource.read_text(encoding=encoding)
