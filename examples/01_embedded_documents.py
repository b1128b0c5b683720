"""
Example 01: Embedded Documents

This example demonstrates declaring embedded associations and building a
document tree whose attributes mirror the stored structure.
"""

from docnest import Document, Field, embeds_many, embeds_one, ALL


class Location(Document):
    """A spot inside an address"""
    name = Field()


class Address(Document):
    """Address embedded in a person; ids derive from the street"""
    key_fields = ("street",)
    street = Field()
    state = Field()
    locations = embeds_many(Location)


class Name(Document):
    first_name = Field()
    last_name = Field()


class Person(Document):
    __collection__ = "people"
    title = Field()
    addresses = embeds_many(Address)
    name = embeds_one(Name)


def main():
    person = Person(title="Sir")

    print("=== Building Embedded Documents ===\n")

    # build() parentizes the child before assigning its attributes
    home = person.addresses.build({"street": "Madison Ave", "state": "NY"})
    home.locations.build({"name": "Lobby"})
    person.addresses.push(Address(street="Main St", state="CA"))
    person.association("name").build({"first_name": "Syd", "last_name": "Vicious"})

    print(f"Addresses: {person.addresses.length()}")
    for address in person.addresses.find(ALL):
        print(f"  - {address.id}: {address.street} ({address.state})")
    print(f"Name: {person.name.first_name} {person.name.last_name}\n")

    print("=== Raw Attributes ===\n")
    print(person.raw_attributes)
    print()

    # Position-keyed form input updates existing children and builds new ones
    person.addresses.nested_build({"0": {"state": "NJ"}, "2": {"street": "Elm St"}})
    print("After nested_build:")
    for address in person.addresses:
        print(f"  - {address.street} ({address.state})")


if __name__ == "__main__":
    main()
