from typing import Iterable, List, Set, Tuple

from tagparse._entity import Entity


class ParseResult:
    """The entities extracted from one message, with the message itself."""

    original_message: str
    entities: Tuple[Entity, ...]
    """In scan order, which for parser output is also `position` order."""

    def __init__(self, original_message: str, entities: Iterable[Entity]) -> None:
        self.original_message = original_message
        self.entities = tuple(entities)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(original_message={self.original_message!r}, "
            f"entities={list(self.entities)!r})"
        )

    def get_entities_by_type(self, type_name: str) -> List[Entity]:
        return [entity for entity in self.entities if entity.type == type_name]

    def get_all_types(self) -> Set[str]:
        return {entity.type for entity in self.entities}

    def format(self) -> str:
        """
        Reconstructs the message with each tag replaced by
        the `formatted_value` of its entity.

        Entities are applied in `position` order whatever their order
        in `entities`, and all text outside the tags is kept.
        """

        if not self.entities:
            return self.original_message

        pieces: List[str] = []
        last_index = 0
        for entity in sorted(self.entities, key=lambda e: e.position):
            pieces.append(self.original_message[last_index:entity.position])
            pieces.append(entity.formatted_value)
            last_index = entity.end_position
        pieces.append(self.original_message[last_index:])
        return "".join(pieces)
