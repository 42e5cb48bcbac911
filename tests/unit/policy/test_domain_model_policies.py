"""Tests for the server domain-model policies."""

from guardrails_policy.domain.constants import Severity
from guardrails_policy.policy.horizontal.server.domain_model import (
    domain_method_naming,
    from_factory_method,
    no_logger,
    no_nested_child_arrays,
    no_optional_constructor_params,
    no_parent_id_in_child,
    repository_result_types,
    repository_type_alias,
    vo_equals_method,
)
from tests.policy_test_utils import diagnostics

MODEL = "server/src/domain/model"


class TestNoNestedChildArrays:
    def test_child_entity_without_entity_arrays_is_clean(self) -> None:
        code = """
export class Attachment {
  readonly id: string;
  readonly fileName: string;
  readonly tags: string[];
}
"""
        found = diagnostics(
            no_nested_child_arrays.policy_check, f"{MODEL}/todo/attachment.entity.ts", code
        )
        assert found == []

    def test_child_entity_with_entity_array_reports_once(self) -> None:
        code = """
export class Task {
  readonly id: string;
  readonly subTasks: SubTask[];
}
"""
        found = diagnostics(no_nested_child_arrays.policy_check, f"{MODEL}/project/task.entity.ts", code)
        assert len(found) == 1
        message = found[0].message
        assert "Task" in message
        assert "subTasks" in message
        assert "SubTask[]" in message
        assert found[0].line == 4

    def test_aggregate_root_may_hold_children(self) -> None:
        code = """
export class Todo {
  readonly attachments: Attachment[];
}
"""
        assert diagnostics(no_nested_child_arrays.policy_check, f"{MODEL}/todo/todo.entity.ts", code) == []


class TestNoParentIdInChild:
    def test_parent_id_name(self) -> None:
        assert no_parent_id_in_child.parent_id_name("todo") == "todoId"
        assert no_parent_id_in_child.parent_id_name("project-member") == "projectMemberId"

    def test_child_holding_parent_id_reports(self) -> None:
        code = """
export class Attachment {
  readonly id: string;
  readonly todoId: string;
}
"""
        found = diagnostics(no_parent_id_in_child.policy_check, f"{MODEL}/todo/attachment.entity.ts", code)
        assert len(found) == 1
        assert '"todoId"' in found[0].message

    def test_root_is_not_checked(self) -> None:
        code = "export class Todo { readonly todoId: string; }\n"
        assert diagnostics(no_parent_id_in_child.policy_check, f"{MODEL}/todo/todo.entity.ts", code) == []


class TestDomainMethodNaming:
    def test_setters_report(self) -> None:
        code = """
export class Todo {
  setStatus(status: string): Todo { return this; }
  update(props: Props): Todo { return this; }
  complete(): Todo { return this; }
  updatedAt(): string { return ""; }
}
"""
        found = diagnostics(domain_method_naming.policy_check, f"{MODEL}/todo/todo.entity.ts", code)
        assert [d.line for d in found] == [3, 4]


class TestNoOptionalConstructorParams:
    def test_optional_props_report(self) -> None:
        code = """
export type TodoProps = {
  id: string;
  description?: string;
  dueDate: string | undefined;
};
"""
        found = diagnostics(no_optional_constructor_params.policy_check, f"{MODEL}/todo/todo.entity.ts", code)
        assert len(found) == 1
        assert '"TodoProps.description"' in found[0].message

    def test_non_props_types_are_ignored(self) -> None:
        code = "export type Filter = { status?: string };\n"
        assert diagnostics(no_optional_constructor_params.policy_check, f"{MODEL}/todo/todo.vo.ts", code) == []


class TestFromFactoryMethod:
    def test_class_without_static_from_reports(self) -> None:
        code = """
export class TodoTitle {
  constructor(readonly value: string) {}
}
"""
        found = diagnostics(from_factory_method.policy_check, f"{MODEL}/todo/todo-title.vo.ts", code)
        assert len(found) == 1
        assert "TodoTitle" in found[0].message

    def test_static_from_is_clean(self) -> None:
        code = """
export class TodoTitle {
  private constructor(readonly value: string) {}
  static from(props: { value: string }): TodoTitle { return new TodoTitle(props.value); }
}
"""
        assert diagnostics(from_factory_method.policy_check, f"{MODEL}/todo/todo-title.vo.ts", code) == []

    def test_dummy_files_are_excluded(self) -> None:
        assert not from_factory_method.policy_check.matches(f"{MODEL}/todo/todo.dummy.entity.ts")


class TestVoEqualsMethod:
    def test_missing_equals_reports(self) -> None:
        code = "export class TodoStatus { static from() { return new TodoStatus(); } }\n"
        found = diagnostics(vo_equals_method.policy_check, f"{MODEL}/todo/todo-status.vo.ts", code)
        assert len(found) == 1

    def test_equals_present_is_clean(self) -> None:
        code = "export class TodoStatus { equals(other: TodoStatus): boolean { return true; } }\n"
        assert diagnostics(vo_equals_method.policy_check, f"{MODEL}/todo/todo-status.vo.ts", code) == []


class TestRepositoryPolicies:
    PATH = f"{MODEL}/todo/todo.repository.ts"

    def test_type_alias_repository_is_clean(self) -> None:
        code = """
export type TodoRepository = {
  findById(props: { id: string }): Promise<Result<Todo | undefined, UnexpectedError>>;
  save: (props: { todo: Todo }) => Promise<Result<void, UnexpectedError>>;
  todoId(): string;
};
"""
        assert diagnostics(repository_type_alias.policy_check, self.PATH, code) == []
        assert diagnostics(repository_result_types.policy_check, self.PATH, code) == []

    def test_class_and_interface_report(self) -> None:
        code = """
export interface TodoRepository { findAll(): Promise<Todo[]>; }
export class TodoRepositoryImpl {}
"""
        found = diagnostics(repository_type_alias.policy_check, self.PATH, code)
        assert len(found) == 2

    def test_result_types(self) -> None:
        code = """
export type TodoRepository = {
  findAll(): Promise<Todo[]>;
  count(): number;
  remove(props: { id: string });
};
"""
        found = diagnostics(repository_result_types.policy_check, self.PATH, code)
        assert len(found) == 3
        assert "without a Result" in found[0].message
        assert "not a Promise" in found[1].message
        assert "no return type" in found[2].message


class TestNoLogger:
    def test_typescript_logger_import_and_call(self) -> None:
        code = """
import { logger } from "../../../util/logger";
export class Todo {
  complete(): Todo {
    logger.info("completed");
    return this;
  }
}
"""
        found = diagnostics(no_logger.policy_check, f"{MODEL}/todo/todo.entity.ts", code)
        assert [d.line for d in found] == [2, 5]
        assert all(d.severity is Severity.ERROR for d in found)

    def test_python_logging_import(self) -> None:
        code = "import logging\nfrom dataclasses import dataclass\n\n\n@dataclass\nclass Todo:\n    title: str\n"
        found = diagnostics(no_logger.policy_check, f"{MODEL}/todo/todo.py", code)
        assert len(found) == 1
        assert found[0].line == 1
        assert '"logging"' in found[0].message
