"""Command-line front end: ``motor <command> [<arguments>]``."""

from __future__ import annotations

import sys
from typing import Callable, Sequence

from motor.objects import Commit
from motor.repository import Repository, find_repository
from motor.utils import MotorError

_FAILURES = (MotorError, OSError, ValueError)

_USAGE = """\
Используйте: motor <команда> [<аргументы>]

Команды:
  init                           Создать пустой репозиторий
  add <файл/каталог>             Добавить файл или каталог в индекс
  commit -m <сообщение>          Записать изменения в хранилище
  branch                         Список веток
  branch <имя>                   Создать новую ветку
  branch -d <имя>                Удалить ветку
  checkout <ветка>               Переключиться на ветку
  checkout <хеш>                 Переключиться на коммит
  tag                            Список тегов
  tag <имя>                      Создать легкий тег
  tag -a <имя> -m <сообщение>    Создать аннотированный тег
  tag -d <имя>                   Удалить тег
  log                            Показать журнал коммитов
  status                         Показать статус рабочего каталога
"""


def _error(text: str) -> None:
    print(text, file=sys.stderr)


def _cmd_init(args: list[str]) -> None:
    Repository.init(args[0] if args else ".")
    print("Инициализирован пустой репозиторий Motor")


def _cmd_add(args: list[str]) -> None:
    if not args:
        _error("Ничего не указано, ничего не добавлено.")
        return
    repo = find_repository()
    for path in args:
        try:
            repo.add(path)
            print(f"Добавлено: {path}")
        except _FAILURES as exc:
            _error(f"Ошибка добавления {path}: {exc}")


def _cmd_commit(args: list[str]) -> None:
    if len(args) < 2 or args[0] != "-m":
        _error("Использование: motor commit -m <сообщение>")
        return
    repo = find_repository()
    try:
        commit_hash = repo.commit(args[1])
        print(f"Создан коммит {commit_hash}")
    except _FAILURES as exc:
        _error(f"Ошибка создания коммита: {exc}")


def _cmd_branch(args: list[str]) -> None:
    repo = find_repository()
    if not args:
        current = repo.current_branch()
        for branch in repo.list_branches():
            if branch == current:
                print(f"* {branch} (текущая)")
            else:
                print(f"  {branch}")
    elif args[0] == "-d" and len(args) > 1:
        try:
            repo.delete_branch(args[1])
            print(f"Удалена ветка {args[1]}")
        except _FAILURES as exc:
            _error(f"Ошибка удаления ветки: {exc}")
    else:
        name = args[0]
        try:
            repo.create_branch(name, repo.head_commit())
            print(f"Создана ветка {name}")
        except _FAILURES as exc:
            _error(f"Ошибка создания ветки: {exc}")


def _cmd_checkout(args: list[str]) -> None:
    if not args:
        _error(
            "Использование: motor checkout <имя-ветки> или motor checkout <хеш-коммита>"
        )
        return
    repo = find_repository()
    target = args[0]
    try:
        try:
            repo.checkout_branch(target)
            print(f"Переключение на ветку '{target}'")
        except _FAILURES:
            repo.checkout(target)
            print(f"HEAD теперь на коммите {target}")
    except _FAILURES as exc:
        _error(f"Ошибка переключения: {exc}")


def _cmd_tag(args: list[str]) -> None:
    repo = find_repository()
    if not args:
        for tag in repo.list_tags():
            print(tag)
    elif args[0] == "-d" and len(args) > 1:
        try:
            repo.delete_tag(args[1])
            print(f"Удален тег {args[1]}")
        except _FAILURES as exc:
            _error(f"Ошибка удаления тега: {exc}")
    else:
        if args[0] == "-a" and len(args) >= 4 and args[2] == "-m":
            name, message = args[1], args[3]
        else:
            name, message = args[0], ""
        try:
            repo.create_tag(name, repo.head_commit(), message)
            print(f"Создан тег {name}")
        except _FAILURES as exc:
            _error(f"Ошибка создания тега: {exc}")


def _cmd_log(args: list[str]) -> None:
    repo = find_repository()
    try:
        for commit_hash in repo.commit_history(repo.head_commit()):
            print(f"коммит {commit_hash}")
            obj = repo.read_object(commit_hash)
            if isinstance(obj, Commit):
                print(f"Сообщение: {obj.message}\n")
    except _FAILURES as exc:
        _error(f"Ошибка отображения журнала: {exc}")


def _cmd_status(args: list[str]) -> None:
    repo = find_repository()
    try:
        branch = repo.current_branch()
        if branch:
            print(f"На ветке {branch}\n")
        else:
            print(f"HEAD отсоединен на коммите {repo.head_commit()}\n")
        entries = repo.index_entries()
        if entries:
            print("Изменения, подготовленные для коммита:")
            for path in entries:
                print(f"  {path}")
        else:
            print("Нет изменений, подготовленных для коммита")
    except _FAILURES as exc:
        _error(f"Ошибка отображения статуса: {exc}")


_COMMANDS: dict[str, Callable[[list[str]], None]] = {
    "init": _cmd_init,
    "add": _cmd_add,
    "commit": _cmd_commit,
    "branch": _cmd_branch,
    "checkout": _cmd_checkout,
    "tag": _cmd_tag,
    "log": _cmd_log,
    "status": _cmd_status,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command and return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stdout.write(_USAGE)
        return 1
    command, *rest = args
    handler = _COMMANDS.get(command)
    if handler is None:
        _error(f"Неизвестная команда: {command}")
        sys.stdout.write(_USAGE)
        return 1
    try:
        handler(rest)
    except _FAILURES as exc:
        _error(f"Ошибка: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())