"""Organizational hierarchy as an id-indexed graph.

Employees are stored in an arena (list) addressed by position; ``_index`` maps
ids to positions and ``_children`` holds, per position, the positions of the
employees whose ``manager_id`` points at it. Both walks keep an explicit
visited set, so cyclic or self-referential manager data always terminates.
"""

from __future__ import annotations

from typing import Iterable

from lexscope.kernel.security import Employee


class OrgHierarchy:
    def __init__(self, employees: Iterable[Employee]) -> None:
        self._arena: list[Employee] = []
        self._index: dict[str, int] = {}
        for employee in employees:
            # last record wins for duplicate ids
            if employee.id in self._index:
                self._arena[self._index[employee.id]] = employee
                continue
            self._index[employee.id] = len(self._arena)
            self._arena.append(employee)

        self._children: list[list[int]] = [[] for _ in self._arena]
        for position, employee in enumerate(self._arena):
            parent = self._index.get(employee.manager_id) if employee.manager_id else None
            if parent is not None:
                self._children[parent].append(position)

    def __len__(self) -> int:
        return len(self._arena)

    def __contains__(self, employee_id: object) -> bool:
        return employee_id in self._index

    def get(self, employee_id: str) -> Employee | None:
        position = self._index.get(employee_id)
        return None if position is None else self._arena[position]

    def manager_chain(self, employee_id: str) -> tuple[str, ...]:
        """Ancestor ids, nearest manager first.

        The walk stops silently at the first revisited id, so a cycle
        truncates the chain and the employee never appears in its own chain.
        A manager that is unknown (deleted) or not active is included once
        and ends the chain.
        """
        start = self.get(employee_id)
        if start is None:
            return ()
        chain: list[str] = []
        visited = {start.id}
        manager_id = start.manager_id
        while manager_id and manager_id not in visited:
            visited.add(manager_id)
            chain.append(manager_id)
            manager = self.get(manager_id)
            if manager is None or not manager.is_active:
                break
            manager_id = manager.manager_id
        return tuple(chain)

    def reportees(self, employee_id: str) -> tuple[str, ...]:
        """All active transitive subordinates of *employee_id*, depth-first.

        Inactive employees are neither included nor descended into. The root
        is excluded even when cyclic data makes it its own subordinate.
        """
        root = self._index.get(employee_id)
        if root is None:
            return ()
        found: list[str] = []
        visited = {root}
        stack = list(reversed(self._children[root]))
        while stack:
            position = stack.pop()
            if position in visited:
                continue
            visited.add(position)
            employee = self._arena[position]
            if not employee.is_active:
                continue
            found.append(employee.id)
            stack.extend(reversed(self._children[position]))
        return tuple(found)


__all__ = ["OrgHierarchy"]
