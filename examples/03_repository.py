"""
Example 03: Repository Pattern

This example demonstrates using the Repository pattern with scopes and
paginating an embedded collection.
"""

import tempfile
from pathlib import Path

from docnest import Document, Engine, Field, Repository, StoreConfig, embeds_many, scope


class Address(Document):
    street = Field()
    state = Field()

    @scope
    def california(criteria):
        return criteria.where(state="CA")


class Person(Document):
    __collection__ = "people"
    title = Field()
    age = Field()
    addresses = embeds_many(Address)

    @scope
    def adults(criteria):
        return criteria.where(age=lambda age: age is not None and age >= 18)


class PersonRepository(Repository[Person]):
    """Repository for Person documents"""

    def __init__(self, engine: Engine):
        super().__init__(engine, Person)

    def find_adults(self) -> list[Person]:
        return Person.adults.execute()


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    engine = Engine.from_config(StoreConfig(driver="sqlite", database=db_path))
    repo = PersonRepository(engine)

    print("=== Repository Pattern ===\n")

    alice = Person(title="Alice", age=34)
    for street, state in [("Main St", "CA"), ("Elm St", "NY"), ("Oak St", "CA")]:
        alice.addresses.build({"street": street, "state": state})
    repo.save(alice)
    repo.save(Person(title="Bob", age=12))

    print("Adults:")
    for person in repo.find_adults():
        print(f"  - {person.title} ({person.age})")

    loaded = repo.get(alice.id)
    print(f"\nCalifornia addresses of {loaded.title}:")
    for address in loaded.addresses.california:
        print(f"  - {address.street}")

    page = loaded.addresses.paginate({"page": 1, "per_page": 2})
    print(f"\nPage {page.page} of {page.total_pages}: {[a.street for a in page]}")

    # Clean up
    engine.close()
    Path(db_path).unlink()


if __name__ == "__main__":
    main()
