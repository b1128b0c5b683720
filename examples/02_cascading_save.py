"""
Example 02: Cascading Save

This example demonstrates saving an embedded document: the save travels up
to the root, which writes the whole tree in one storage call. Callbacks of
every level run around that write.
"""

from docnest import (
    Document,
    Engine,
    Field,
    StoreConfig,
    after_save,
    before_save,
    embeds_many,
)


class Location(Document):
    name = Field()

    @before_save
    def strip_name(self):
        self.name = self.name.strip()

    @after_save
    def announce(self):
        print(f"  after_save: location {self.name!r}")


class Address(Document):
    key_fields = ("street",)
    street = Field()
    locations = embeds_many(Location)

    def validate(self):
        if not self.street:
            self.errors.append("street is required")

    @after_save
    def announce(self):
        print(f"  after_save: address {self.street!r}")


class Person(Document):
    __collection__ = "people"
    title = Field()
    addresses = embeds_many(Address)

    @after_save
    def announce(self):
        print(f"  after_save: person {self.title!r}")


def main():
    config = StoreConfig(driver="sqlite", database=":memory:")
    engine = Engine.from_config(config)
    engine.bind(Person)

    print("=== Saving From a Leaf ===\n")

    person = Person(title="Sir")
    address = person.addresses.build({"street": "Madison Ave"})
    location = address.locations.build({"name": "  Lobby  "})

    saved = location.save()
    print(f"\nSaved: {saved}")
    print(f"Stored: {Person.collection.find_one(person.id)}\n")

    print("=== Validation Stops the Cascade ===\n")

    address.street = ""
    print(f"Saved: {location.save()}")
    print(f"Errors on address: {address.errors}")

    engine.close()


if __name__ == "__main__":
    main()
