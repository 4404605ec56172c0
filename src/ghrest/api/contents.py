"""Repository content endpoint."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from ghrest.core.errors import ParameterError
from ghrest.core.resolver import FromDefaults, RepositorySource, resolve
from ghrest.core.rest import MediaType, invoke_rest_method, media_accept_header, with_query
from ghrest.core.schema import Content
from ghrest.core.session import GitHubSession

ContentResult = Union[Content, list[Content], bytes, Path]


def get_content(
    session: GitHubSession,
    path: str = "",
    source: RepositorySource = FromDefaults(),
    media_type: MediaType = MediaType.OBJECT,
    ref: str | None = None,
    decode: bool = False,
    result_as_file: Path | None = None,
) -> ContentResult:
    """Fetch a file or directory listing.

    With the default object media type a file comes back as :class:`Content`
    with its base64 payload untouched; ``decode=True`` returns the decoded
    bytes instead. ``MediaType.RAW`` and ``MediaType.HTML`` return the bytes
    GitHub serves. ``result_as_file`` writes the bytes to disk and returns
    the path.
    """
    if media_type not in (MediaType.OBJECT, MediaType.RAW, MediaType.HTML):
        raise ParameterError(f"Unsupported media type for contents: {media_type.value}")

    repo = resolve(session, source)
    fragment = with_query(f"{repo.path}/contents/{path.lstrip('/')}".rstrip("/"), {"ref": ref})
    description = f"Getting content of {path or '/'} in {repo}"

    if media_type is MediaType.OBJECT:
        data = invoke_rest_method(
            session,
            fragment,
            description=description,
            accept_header=media_accept_header(MediaType.OBJECT),
        )
        if isinstance(data, list):
            if decode or result_as_file:
                raise ParameterError(f"{path or '/'} is a directory; nothing to decode")
            return [Content.model_validate(item) for item in data]
        content = Content.model_validate(data)
        if not (decode or result_as_file):
            return content
        if content.type != "file":
            raise ParameterError(f"{content.path} is a {content.type}; nothing to decode")
        if content.encoding == "none":
            # Files over 1 MB come back without inline content.
            payload = _fetch_bytes(session, fragment, description, MediaType.RAW)
        else:
            payload = content.decode()
    else:
        payload = _fetch_bytes(session, fragment, description, media_type)

    if result_as_file is not None:
        result_as_file.parent.mkdir(parents=True, exist_ok=True)
        result_as_file.write_bytes(payload)
        return result_as_file
    return payload


def _fetch_bytes(
    session: GitHubSession, fragment: str, description: str, media_type: MediaType
) -> bytes:
    return invoke_rest_method(
        session,
        fragment,
        description=description,
        accept_header=media_accept_header(media_type, as_json=False),
        save_raw=True,
    ) or b""
