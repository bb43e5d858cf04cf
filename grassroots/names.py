# grassroots/names.py
# Flavor-data suppliers: people names come from Faker, towns from a small
# regional table with Faker cities as the fallback.

from faker import Faker

from grassroots import rng

fakers = {
    "England": Faker("en_GB"),
}
_fake = fakers["England"]

# region -> towns close enough to share a grassroots league
NEARBY_TOWNS = {
    "Sileby": ("Loughborough", "Mountsorrel", "Rothley", "Syston", "Barrow upon Soar",
               "Quorn", "Anstey", "Thurmaston", "Melton Mowbray", "Leicester"),
    "Loughborough": ("Sileby", "Shepshed", "Quorn", "Kegworth", "Mountsorrel", "Hathern"),
    "Melton Mowbray": ("Asfordby", "Wymondham", "Somerby", "Oakham", "Syston"),
    "Leicester": ("Oadby", "Wigston", "Blaby", "Enderby", "Braunstone", "Anstey",
                  "Thurmaston", "Glenfield"),
    "Nottingham": ("Long Eaton", "Beeston", "West Bridgford", "Arnold", "Hucknall", "Carlton"),
    "Derby": ("Long Eaton", "Ilkeston", "Alfreton", "Belper", "Ripley"),
}

GENERIC_VILLAGES = ("Newton", "Kingston", "Charlton", "Stanton", "Hinton",
                    "Morton", "Burton", "Oakley", "Ashley", "Bradley")


def seed(value):
    _fake.seed_instance(value)


def pick_first_name():
    return _fake.first_name_male()


def pick_last_name():
    return _fake.last_name()


def pick_full_name():
    return f"{pick_first_name()} {pick_last_name()}"


def nearby_towns(region):
    """Towns plausibly sharing a league with `region` (region itself included)."""
    main_word = (region or "").strip()
    specific = list(NEARBY_TOWNS.get(main_word, ()))
    villages = list(GENERIC_VILLAGES[:rng.random_int(3, 7)])
    towns = []
    for town in specific + villages + ([main_word] if main_word else []):
        if town not in towns:
            towns.append(town)
    return towns


def pick_town(region=None):
    if region:
        return rng.random_element(nearby_towns(region))
    return _fake.city()
