from dataclasses import dataclass
from datetime import datetime
from typing import Optional, TypeVar, ClassVar, Any, Hashable, get_type_hints, get_origin, Self
from typing import TYPE_CHECKING

from bson import ObjectId

from fast_rules.config import SCENARIO_CREATE, SCENARIO_UPDATE
from fast_rules.core.model_validator import ModelValidator
from fast_rules.core.result_cache import ResultCache
from fast_rules.core.rule_book import RuleBook
from fast_rules.core.validator_registry import ValidatorRegistry, default_registry
from fast_rules.database.mongo import get_db
from fast_rules.exceptions.common_exceptions import DatabaseNotInitializedException
from fast_rules.exceptions.model_exceptions import ModelNotFoundException
from fast_rules.exceptions.validation_exceptions import ModelValidationException
from fast_rules.utils.datetime_utils import now
from fast_rules.utils.serialisation import serialise

if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection
    from fast_rules import Observer


T = TypeVar('T', bound='Model')


@dataclass
class Model:
    """MongoDB document with declarative, asynchronous validation.

    Rules are declared per field in `validation` and resolved when the class
    is defined. Extra rules for a scenario are appended with `add_rules`:

        class Product(Model):
            name: str
            quantity: int

            validation = {
                "name": [
                    {"validator": "not_empty", "message": "name is required"},
                    UniqueValidatorRule(),
                ],
                "quantity": [{"validator": "is_int", "message": "quantity must be integer"}],
            }

        Product.add_rules({"name": keep_name_on_update}, "update")

    A subclass without its own `validation` inherits the parent's rules,
    including scenario rules added so far.

    `save()` validates with the "create" or "update" scenario before writing
    and raises `ModelValidationException` when any field collects an error.
    """

    protected: ClassVar[list[str]] = ["_id", "created_at", "updated_at"]

    validation: ClassVar[dict[str, Any]] = {}
    validator_registry: ClassVar[ValidatorRegistry] = default_registry

    _id: Optional[ObjectId] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._rule_book = cls._build_rule_book()

    def __init__(self, *args, **kwargs):
        self.observers: list['Observer'] = []
        self.clean: dict[str, Any] = {}
        self.validation_cache = ResultCache()
        self._revision = 0

        is_from_db = '_id' in kwargs and kwargs['_id'] is not None

        for key in self.model_fields().keys():
            if key not in kwargs and not hasattr(type(self), key):
                super().__setattr__(key, None)

        for key, value in kwargs.items():
            if key in self.model_fields().keys():
                if is_from_db:
                    super().__setattr__(key, value)
                else:
                    setattr(self, key, value)

    def __str__(self):
        return str(self.dict())

    #
    # Rules
    #
    @classmethod
    def _build_rule_book(cls) -> RuleBook:
        if 'validation' not in cls.__dict__:
            for base in cls.__mro__[1:]:
                parent_book = base.__dict__.get('_rule_book')
                if parent_book is not None:
                    return parent_book.copy()
        return RuleBook.from_specs(cls.validation, cls.validator_registry)

    @classmethod
    def rule_book(cls) -> RuleBook:
        book = cls.__dict__.get('_rule_book')
        if book is None:
            book = cls._build_rule_book()
            cls._rule_book = book
        return book

    @classmethod
    def add_rules(cls, rules: dict[str, Any], scenario: Optional[str] = None) -> None:
        """Append rules to the end of each field's chain, only active under `scenario`."""
        cls.rule_book().add_rules(rules, scenario)

    async def validate(self, scenario: Optional[str] = None) -> None:
        """Run the rule chains of `scenario` (the base rules when omitted).

        Raises:
            ModelValidationException: One or more fields collected errors (see `.errors`).
            RuleExecutionException: A rule crashed, e.g. its database lookup failed.
        """
        book = self.rule_book()
        book.freeze()
        try:
            ran = await ModelValidator(book).validate(self, scenario)
        except ModelValidationException as e:
            await self._notify_observer('on_validation_failed', e.errors)
            raise
        if ran:
            await self._notify_observer('on_validated')

    def identity(self) -> Hashable:
        return self._id if self._id is not None else id(self)

    @property
    def revision(self) -> int:
        """Number of writes to validated fields since construction."""
        return self._revision

    def _touch_validated(self) -> None:
        self._revision += 1
        self.validation_cache.invalidate()

    #
    # Persistence
    #
    @classmethod
    def collection_name(cls) -> str:
        return cls.__name__.lower()

    @classmethod
    async def collection_cls(cls) -> 'AsyncIOMotorCollection':
        db = await get_db()
        if db is None:
            raise DatabaseNotInitializedException()
        return db[cls.collection_name()]

    async def collection(self) -> 'AsyncIOMotorCollection':
        return await self.collection_cls()

    @classmethod
    async def exec_find(cls, *args, **kwargs) -> list[dict[str, Any]]:
        cursor = (await cls.collection_cls()).find(*args, **kwargs)
        return [d async for d in cursor]

    @classmethod
    async def exec_find_one(cls, *args, **kwargs) -> Optional[dict[str, Any]]:
        return await (await cls.collection_cls()).find_one(*args, **kwargs)

    @classmethod
    async def exec_count(cls, *args, **kwargs) -> int:
        return await (await cls.collection_cls()).count_documents(*args, **kwargs)

    async def save(self, scenario: Optional[str] = None) -> Self:
        """Validate and write the model.

        The scenario defaults to "create" for new models and "update" for
        persisted ones. Nothing is written when validation fails.
        """
        if self._id:
            await self._update(scenario or SCENARIO_UPDATE)
        else:
            await self._create(scenario or SCENARIO_CREATE)
        return self

    @classmethod
    def model_fields(cls) -> dict[str, Any]:
        cached = cls.__dict__.get('_cached_model_fields')
        if cached is not None:
            return cached

        annotations: dict[str, Any] = {}
        for base in cls.__mro__:
            if hasattr(base, '__annotations__'):
                base_hints = get_type_hints(base)
                for name, hint in base_hints.items():
                    # Skip ClassVar annotations
                    if get_origin(hint) is ClassVar:
                        continue
                    annotations[name] = hint

        cls._cached_model_fields = annotations
        return annotations

    @classmethod
    def fillable_fields(cls) -> list[str]:
        return [f for f in cls.model_fields().keys() if f not in cls.protected]

    @classmethod
    def all_fields(cls) -> list[str]:
        return list(cls.model_fields().keys())

    async def _notify_observer(self, hook: str, *args) -> None:
        for observer in self.observers:
            await getattr(observer, hook)(self, *args)

    @staticmethod
    def _build_update_payload(set_values: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"$currentDate": {"updated_at": True}}
        if set_values:
            payload["$set"] = dict(set_values)
        return payload

    async def _update(self, scenario: str) -> None:
        await self._notify_observer('on_updating')
        await self.validate(scenario)
        coll = await self.collection()
        query = await self.query_modifier({'_id': self._id}, "update", self.collection_name())
        update_payload = self._build_update_payload(
            set_values={key: self.get(key) for key in self.clean.keys() if key != '_id'},
        )
        await coll.update_one(query, update_payload)
        await self.refresh()
        self.validation_cache.record(self)
        await self._notify_observer('on_updated')

    async def _create(self, scenario: str) -> None:
        await self._notify_observer('on_creating')
        await self.validate(scenario)
        to_insert = {
            **{key: self.get(key) for key in self.fillable_fields()},
            'created_at': self.get('created_at') or now(),
            'updated_at': self.get('updated_at') or now(),
        }
        data = await self.query_modifier(to_insert, "create", self.collection_name())
        coll = await self.collection()
        result = await coll.insert_one(data)
        super().__setattr__('_id', result.inserted_id)
        await self.refresh()
        self.validation_cache.record(self)
        await self._notify_observer('on_created')

    @classmethod
    async def create(cls: type[T], data: dict[str, Any]) -> T:
        instance = cls(**data)
        await instance.save()
        return instance

    async def refresh(self) -> Self:
        """Reload from the database. Pending changes are dropped."""
        coll = await self.collection()
        data = await coll.find_one({'_id': self._id})
        if data:
            for key, value in data.items():
                super().__setattr__(key, value)
            self.clean = {}
        return self

    @classmethod
    async def find_by_id(cls: type[T], _id: str | ObjectId) -> Optional[T]:
        object_id = ObjectId(_id) if isinstance(_id, str) else _id
        return await cls.find_one({'_id': object_id})

    @classmethod
    async def find(cls: type[T], query: dict[str, Any], **kwargs) -> list[T]:
        final_query = await cls.query_modifier(query, "find", cls.collection_name())
        results = await cls.exec_find(final_query, **kwargs)
        return [cls(**data) for data in results]

    @classmethod
    async def find_one(cls: type[T], query: dict[str, Any], **kwargs) -> Optional[T]:
        final_query = await cls.query_modifier(query, "find_one", cls.collection_name())
        data = await cls.exec_find_one(final_query, **kwargs)
        return cls(**data) if data else None

    @classmethod
    async def find_or_fail(cls: type[T], query: dict[str, Any], **kwargs) -> T:
        instance = await cls.find_one(query, **kwargs)
        if not instance:
            raise ModelNotFoundException(cls.__name__)
        return instance

    @classmethod
    async def exists(cls, query: dict[str, Any]) -> bool:
        final_query = await cls.query_modifier(query, "count", cls.collection_name())
        return await cls.exec_count(final_query) > 0

    @classmethod
    async def count(cls, query: Optional[dict[str, Any]] = None, **kwargs) -> int:
        final_query = await cls.query_modifier(query or {}, "count", cls.collection_name())
        return await cls.exec_count(final_query, **kwargs)

    async def delete(self) -> None:
        await self._notify_observer('on_deleting')
        coll = await self.collection()
        query = await self.query_modifier({'_id': self._id}, "delete", self.collection_name())
        await coll.delete_one(query)
        await self._notify_observer('on_deleted')

    async def update(self, data: dict[str, Any], scenario: Optional[str] = None) -> Self:
        for key, value in data.items():
            self.set(key, value)
        await self.save(scenario)
        return self

    #
    # Attributes
    #
    def is_new(self) -> bool:
        return self._id is None

    def is_dirty(self, key: str) -> bool:
        return key in self.clean

    def dirty_fields(self) -> set[str]:
        return set(self.clean.keys())

    def get(self, key: str, default: Any = None) -> Any:
        attr = getattr(self, key, default)
        return attr if attr is not None else default

    def set(self, key: str, value: Any) -> None:
        setattr(self, key, value)

    def unset(self, key: str) -> None:
        """Drop the value of `key`; it is no longer dirty, so an update will not write it."""
        self.clean.pop(key, None)
        super().__setattr__(key, None)
        if key in self.rule_book().fields:
            self._touch_validated()

    @property
    def id(self) -> Optional[ObjectId]:
        return self._id

    def __setattr__(self, key: str, value: Any) -> None:
        """Override the default setattr to track changes to the model."""
        if key in self.model_fields().keys():
            if not self.is_dirty(key):
                self.clean[key] = self.get(key)
            if key in self.rule_book().fields:
                self._touch_validated()

        super().__setattr__(key, value)

    def dict(self, *args, **kwargs):
        """Override the default dict method."""
        data = {key: serialise(getattr(self, key, None)) for key in self.all_fields()}
        return data

    @classmethod
    async def query_modifier(cls, query: dict, function_name: str = None, model_name: str = None) -> dict:
        return query

    #
    # Observers
    #
    def register_observer(self, observer: 'Observer'):
        """Register an observer for this model."""
        self.observers.append(observer)
