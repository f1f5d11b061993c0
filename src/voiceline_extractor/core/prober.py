# ABOUTME: Per-language existence probing of one coordinate against the content store
# ABOUTME: Treats missing and unreadable files as per-language outcomes; other failures propagate

from collections.abc import Callable, Iterable, Mapping
from typing import TypeVar

from voiceline_extractor.core.models import ProbeResult
from voiceline_extractor.core.paths import ResourcePath
from voiceline_extractor.store.base import ContentStore, ResourceNotFound, ResourceReadError

C = TypeVar("C")

Renderer = Callable[[C, str], ResourcePath]


def probe(
    store: ContentStore, coordinate: C, languages: Iterable[str], renderer: Renderer
) -> dict[str, ProbeResult]:
    """Fetch every language variant of ``coordinate``.

    Args:
        store: Content store answering point queries
        coordinate: Coordinate to render for each language
        languages: Language codes, probed in sorted order
        renderer: Maps (coordinate, language) to a store path

    Returns:
        Mapping of language to its probe result, in sorted language order
    """
    results: dict[str, ProbeResult] = {}
    for language in sorted(set(languages)):
        resource = renderer(coordinate, language)
        try:
            data = store.fetch(resource.path)
        except (ResourceNotFound, ResourceReadError) as e:
            results[language] = ProbeResult(
                language=language,
                directory=resource.directory,
                file_name=resource.file_name,
                exists=False,
                error=e,
            )
            continue
        results[language] = ProbeResult(
            language=language,
            directory=resource.directory,
            file_name=resource.file_name,
            exists=True,
            data=data,
        )
    return results


def any_exists(results: Mapping[str, ProbeResult]) -> bool:
    """Whether at least one language variant is present in the store."""
    return any(result.present for result in results.values())
