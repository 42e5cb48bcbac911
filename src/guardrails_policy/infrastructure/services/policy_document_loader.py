"""PolicyDocumentLoader: reads selected markdown policy documents."""

import asyncio

from guardrails_policy.domain.constants import POLICY_DOCUMENT_HEADER
from guardrails_policy.domain.entities import PolicyDocument, PolicySelection
from guardrails_policy.domain.exceptions import PolicyDocumentNotFoundError
from guardrails_policy.domain.protocols import FileSystemProtocol, PolicyDocumentLoaderProtocol


class PolicyDocumentLoader(PolicyDocumentLoaderProtocol):
    """
    Loads the documents of a PolicySelection in selection order.

    Every path is checked before any file is read, so a missing document
    fails the whole load without partial output.
    """

    def __init__(self, filesystem: FileSystemProtocol) -> None:
        self._filesystem = filesystem

    async def load(self, selection: PolicySelection) -> list[PolicyDocument]:
        paths = list(selection.documents)
        found = await asyncio.gather(
            *(asyncio.to_thread(self._filesystem.exists, str(path)) for path in paths)
        )
        for path, exists in zip(paths, found):
            if not exists:
                raise PolicyDocumentNotFoundError(str(path))
        contents = await asyncio.gather(
            *(asyncio.to_thread(self._filesystem.read_text, str(path)) for path in paths)
        )
        return [
            PolicyDocument(
                name=path.name,
                path=path,
                content=POLICY_DOCUMENT_HEADER.format(name=path.name) + content,
            )
            for path, content in zip(paths, contents)
        ]

    @staticmethod
    def concatenate(documents: list[PolicyDocument]) -> str:
        return "\n\n".join(document.content for document in documents)
