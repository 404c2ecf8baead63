from __future__ import annotations


class MalformedResourceNameError(ValueError):
    pass


_RESOURCE_ID_SEGMENT = 3


def extract_resource_id(resource_name: str) -> str:
    """Return the 4th dot-delimited segment of a resource name.

    Resource names look like ``<org>.<project>.<target>.<resource-id>[...]``.
    """

    segments = resource_name.split(".")
    if len(segments) <= _RESOURCE_ID_SEGMENT:
        raise MalformedResourceNameError(
            f"resource_name must contain at least {_RESOURCE_ID_SEGMENT + 1} dot-delimited segments "
            f"(got {resource_name!r})"
        )

    resource_id = segments[_RESOURCE_ID_SEGMENT]
    if not resource_id:
        raise MalformedResourceNameError(f"resource_name has an empty resource id segment (got {resource_name!r})")
    return resource_id


def bucket_name_for(*, app_name: str, env_name: str, resource_name: str) -> str:
    resource_id = extract_resource_id(resource_name)
    name = f"{app_name}-{env_name}-{resource_id}".lower()
    return name.replace(" ", "_").replace(".", "_")
