"""Ingredient data model and (de)serialization helpers.

Defines the two ingredient variants, `Filling` and `Condiment`, and the
`Selection` pairing of an ingredient with a quantity.

Exports
-------
Filling
Condiment
Ingredient
Selection

Notes
-----
Vectors are stored as read-only mappings keyed by the enums in
`models.kinds`. Identity for hashing and de-duplication is
``(category, id)``, so a filling and a condiment that happen to share an
id never compare as the same ingredient.
"""

from dataclasses import (
    dataclass,
    field,
)
from types import (
    MappingProxyType,
)
from typing import (
    Mapping,
    Union,
)

from constants import (
    DEFAULT_MAX_PIECES_ON_DISH,
    RARE_NAME_MARKER,
)
from models.errors import (
    CatalogError,
    IngredientDataError,
)
from models.kinds import (
    Flavor,
    IngredientCategory,
    MealPower,
    PokemonType,
)


def _freeze_vector(
    name: str,
    field_name: str,
    vector: Mapping,
    kind: type,
    allow_negative: bool,
) -> Mapping:
    # Copy into a private dict so later edits to the caller's mapping
    # cannot leak into the ingredient
    frozen = {}
    for key, amount in dict(vector).items():
        if not isinstance(key, kind):
            raise IngredientDataError(
                name, field_name, f"has key {key!r} that is not a {kind.__name__}"
            )
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise IngredientDataError(
                name, field_name, f"amount for {key.value} must be an int, got {amount!r}"
            )
        if amount < 0 and not allow_negative:
            raise IngredientDataError(
                name, field_name, f"amount for {key.value} must be >= 0, got {amount}"
            )
        frozen[key] = amount
    return MappingProxyType(frozen)


def _decode_vector(
    data: dict,
    list_key: str,
    kind_key: str,
    parse,
    label: str,
) -> dict:
    """Decode ``[{"flavor": "Sweet", "amount": 12}, ...]`` into a dict.

    Repeated kinds are summed.
    """
    vector: dict = {}
    for entry in data.get(list_key, []) or []:
        try:
            kind = parse(entry[kind_key])
            amount = int(entry["amount"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"{label}: bad {list_key} entry {entry!r} ({exc})") from exc
        vector[kind] = vector.get(kind, 0) + amount
    return vector


def _encode_vector(
    vector: Mapping,
    kind_key: str,
) -> list[dict]:
    return [
        {kind_key: kind.value, "amount": amount}
        for kind, amount in vector.items()
    ]


class _IngredientBase:
    """Behavior shared by both variants (no fields of its own)."""

    @property
    def is_rare(
        self,
    ) -> bool:
        """Whether this is a rare (Herba Mystica) ingredient, judged by name."""
        return RARE_NAME_MARKER in self.name.lower()

    @property
    def key(
        self,
    ) -> tuple[IngredientCategory, str]:
        """Identity used for de-duplication: ``(category, id)``."""
        return (self.category, self.id)

    def __hash__(
        self,
    ):
        return hash(self.key)

    def __str__(
        self,
    ):
        return self.name


@dataclass(frozen=True)
class Filling(_IngredientBase):
    """A filling: contributes per piece and has a physical piece count.

    Parameters
    ----------
    id : str
        Stable catalog id.
    name : str
        Display name (also the recipe-matching key).
    tastes : Mapping[Flavor, int]
        Non-negative flavor amounts per piece.
    powers : Mapping[MealPower, int]
        Signed power amounts per piece.
    types : Mapping[PokemonType, int]
        Non-negative type amounts per piece.
    pieces : int
        Pieces placed by one use of the filling (catalog default).
    max_pieces_on_dish : int
        Maximum pieces of this filling that fit on one sandwich.
    """

    id: str
    name: str
    tastes: Mapping[Flavor, int] = field(default_factory=dict)
    powers: Mapping[MealPower, int] = field(default_factory=dict)
    types: Mapping[PokemonType, int] = field(default_factory=dict)
    pieces: int = 1
    max_pieces_on_dish: int = DEFAULT_MAX_PIECES_ON_DISH

    category = IngredientCategory.FILLING

    def __post_init__(
        self,
    ):
        _validate_identity(self.id, self.name)
        object.__setattr__(
            self, "tastes", _freeze_vector(self.name, "tastes", self.tastes, Flavor, False)
        )
        object.__setattr__(
            self, "powers", _freeze_vector(self.name, "powers", self.powers, MealPower, True)
        )
        object.__setattr__(
            self, "types", _freeze_vector(self.name, "types", self.types, PokemonType, False)
        )
        for attr in ("pieces", "max_pieces_on_dish"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise IngredientDataError(self.name, attr, f"must be an int >= 1, got {value!r}")

    __hash__ = _IngredientBase.__hash__

    def __repr__(
        self,
    ):
        return f"Filling({self.name!r}, id={self.id!r}, pieces={self.pieces})"

    @classmethod
    def from_dict(
        cls,
        data: dict,
    ) -> "Filling":
        """Create a ``Filling`` from a catalog dictionary.

        Parameters
        ----------
        data : dict
            Must include ``"name"``, ``"id"`` (int or str) and ``"pieces"``.
            Optional keys: ``"tastes"``, ``"powers"``, ``"types"``,
            ``"maxPiecesOnDish"``.

        Returns
        -------
        Filling
            Constructed instance.

        Raises
        ------
        CatalogError
            Missing keys or unknown kind names.
        IngredientDataError
            Decoded values violate an invariant.
        """
        label = str(data.get("name", "<unnamed filling>"))
        try:
            raw_id = data["id"]
            pieces = int(data["pieces"])
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogError(f"{label}: missing or invalid id/pieces ({exc})") from exc
        raw_max = data.get("maxPiecesOnDish", DEFAULT_MAX_PIECES_ON_DISH)
        try:
            max_pieces = int(raw_max)
        except (TypeError, ValueError) as exc:
            raise CatalogError(f"{label}: invalid maxPiecesOnDish {raw_max!r}") from exc
        if "name" not in data:
            raise CatalogError(f"filling id {raw_id!r}: missing name")
        return cls(
            id=str(raw_id),
            name=data["name"],
            tastes=_decode_vector(data, "tastes", "flavor", Flavor.parse, label),
            powers=_decode_vector(data, "powers", "type", MealPower.parse, label),
            types=_decode_vector(data, "types", "type", PokemonType.parse, label),
            pieces=pieces,
            max_pieces_on_dish=max_pieces,
        )

    def to_dict(
        self,
    ) -> dict:
        """Serialize to the catalog JSON shape read by `from_dict`."""
        return {
            "id": self.id,
            "name": self.name,
            "tastes": _encode_vector(self.tastes, "flavor"),
            "powers": _encode_vector(self.powers, "type"),
            "types": _encode_vector(self.types, "type"),
            "pieces": self.pieces,
            "maxPiecesOnDish": self.max_pieces_on_dish,
        }


@dataclass(frozen=True)
class Condiment(_IngredientBase):
    """A condiment: applied once, no piece count.

    Parameters mirror `Filling` minus ``pieces`` and ``max_pieces_on_dish``.
    """

    id: str
    name: str
    tastes: Mapping[Flavor, int] = field(default_factory=dict)
    powers: Mapping[MealPower, int] = field(default_factory=dict)
    types: Mapping[PokemonType, int] = field(default_factory=dict)

    category = IngredientCategory.CONDIMENT

    def __post_init__(
        self,
    ):
        _validate_identity(self.id, self.name)
        object.__setattr__(
            self, "tastes", _freeze_vector(self.name, "tastes", self.tastes, Flavor, False)
        )
        object.__setattr__(
            self, "powers", _freeze_vector(self.name, "powers", self.powers, MealPower, True)
        )
        object.__setattr__(
            self, "types", _freeze_vector(self.name, "types", self.types, PokemonType, False)
        )

    __hash__ = _IngredientBase.__hash__

    def __repr__(
        self,
    ):
        return f"Condiment({self.name!r}, id={self.id!r})"

    @classmethod
    def from_dict(
        cls,
        data: dict,
    ) -> "Condiment":
        """Create a ``Condiment`` from a catalog dictionary.

        The id comes from ``"cid"``, then ``"id"``, falling back to the name.
        """
        if "name" not in data:
            raise CatalogError(f"condiment {data.get('cid', data.get('id'))!r}: missing name")
        label = str(data["name"])
        raw_id = data.get("cid", data.get("id", label))
        return cls(
            id=str(raw_id),
            name=label,
            tastes=_decode_vector(data, "tastes", "flavor", Flavor.parse, label),
            powers=_decode_vector(data, "powers", "type", MealPower.parse, label),
            types=_decode_vector(data, "types", "type", PokemonType.parse, label),
        )

    def to_dict(
        self,
    ) -> dict:
        """Serialize to the catalog JSON shape read by `from_dict`."""
        return {
            "cid": self.id,
            "name": self.name,
            "tastes": _encode_vector(self.tastes, "flavor"),
            "powers": _encode_vector(self.powers, "type"),
            "types": _encode_vector(self.types, "type"),
        }


Ingredient = Union[Filling, Condiment]


def _validate_identity(
    ingredient_id,
    name,
) -> None:
    if not isinstance(name, str) or not name.strip():
        raise IngredientDataError(str(ingredient_id), "name", "must be a non-empty string")
    if not isinstance(ingredient_id, str) or not ingredient_id:
        raise IngredientDataError(name, "id", f"must be a non-empty string, got {ingredient_id!r}")


@dataclass(frozen=True)
class Selection:
    """An ingredient paired with how much of it is used.

    Attributes
    ----------
    ingredient : Filling | Condiment
        Selected ingredient.
    quantity : int
        Pieces for fillings; applications for condiments (conventionally 1,
        and not a multiplier for condiment contributions).
    """

    ingredient: Ingredient
    quantity: int = 1

    def __post_init__(
        self,
    ):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise IngredientDataError(
                self.ingredient.name, "quantity", f"must be an int >= 1, got {self.quantity!r}"
            )

    @property
    def name(
        self,
    ) -> str:
        return self.ingredient.name

    @property
    def is_filling(
        self,
    ) -> bool:
        return isinstance(self.ingredient, Filling)
