"""Bundle selected policy documents with the target code for a reviewer."""

import asyncio
from pathlib import Path
from typing import Optional, Union

from guardrails_policy.domain.entities import PolicyDocument, ReviewPacket
from guardrails_policy.domain.protocols import FileSystemProtocol, PolicyDocumentLoaderProtocol
from guardrails_policy.use_cases.select_policies import PolicySelector

REVIEW_INSTRUCTION = """\
Review the target file against every policy below.

For each violation report:
- the location (line numbers),
- the policy it breaks,
- Bad: the offending code,
- Good: the corrected code,
- Reason: why the policy requires the change.

If the file complies with every policy, say so explicitly.

{policies}

---

## Target file: {target_file_path}

```{language}
{target_code}
```
"""


class PrepareReviewUseCase:
    def __init__(
        self,
        selector: PolicySelector,
        loader: PolicyDocumentLoaderProtocol,
        filesystem: FileSystemProtocol,
    ) -> None:
        self.selector = selector
        self.loader = loader
        self.filesystem = filesystem

    @staticmethod
    def format_policies(documents: list[PolicyDocument]) -> str:
        return "\n\n".join(
            f"## Policy {index}: {document.name}\n\n{document.content}"
            for index, document in enumerate(documents, start=1)
        )

    async def execute(
        self, target_file_path: str, policy_root: Optional[Union[str, Path]] = None
    ) -> ReviewPacket:
        selection = await self.selector.select_policies(target_file_path, policy_root)
        documents = await self.loader.load(selection)
        target_code = await asyncio.to_thread(self.filesystem.read_text, target_file_path)
        language = "tsx" if target_file_path.endswith(".tsx") else "typescript"
        instruction = REVIEW_INSTRUCTION.format(
            policies=self.format_policies(documents),
            target_file_path=target_file_path,
            language=language,
            target_code=target_code.rstrip("\n"),
        )
        return ReviewPacket(
            target_file_path=target_file_path,
            target_code=target_code,
            documents=tuple(documents),
            instruction=instruction,
        )
