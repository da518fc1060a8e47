"""
Display names for pseudonymous participants: adjective-color-country.

Names are for humans only and are not unique; the participant secret is
the identity.
"""
import secrets

ADJECTIVES = [
    "able", "adorable", "adventurous", "agreeable", "alert", "amazing",
    "ancient", "angry", "anxious", "aware", "bold", "brave", "bright",
    "brilliant", "busy", "calm", "careful", "charming", "cheerful", "clever",
    "cold", "cool", "cosmic", "crazy", "curious", "daring", "dizzy", "eager",
    "electric", "elegant", "enchanting", "energetic", "fancy", "fast",
    "fearless", "fierce", "fluffy", "friendly", "funny", "gentle", "giant",
    "glad", "glorious", "graceful", "grumpy", "happy", "hidden", "honest",
    "hungry", "icy", "jolly", "joyous", "keen", "kind", "lazy", "lively",
    "lonely", "loud", "lucky", "magic", "mighty", "modern", "mysterious",
    "nervous", "nice", "noble", "odd", "patient", "peaceful", "polite",
    "proud", "quick", "quiet", "rapid", "rare", "restless", "rich", "royal",
    "rusty", "sad", "shiny", "shy", "silent", "silly", "sleepy", "smart",
    "smooth", "sparkling", "spicy", "steady", "stormy", "strange", "sunny",
    "swift", "tame", "tender", "tiny", "tough", "vast", "wandering", "warm",
    "wild", "wise", "witty", "young", "zealous",
]

COLORS = [
    "amaranth", "amber", "amethyst", "apricot", "aqua", "aquamarine",
    "azure", "beige", "black", "blue", "blush", "bronze", "brown",
    "burgundy", "cerulean", "champagne", "chartreuse", "chocolate", "cobalt",
    "coffee", "copper", "coral", "crimson", "cyan", "emerald", "fuchsia",
    "gold", "gray", "green", "harlequin", "indigo", "ivory", "jade",
    "lavender", "lemon", "lilac", "lime", "magenta", "maroon", "mauve",
    "olive", "orange", "orchid", "peach", "pear", "periwinkle", "pink",
    "plum", "purple", "red", "rose", "ruby", "salmon", "sapphire", "scarlet",
    "silver", "tan", "taupe", "teal", "turquoise", "ultramarine", "violet",
    "viridian", "white", "yellow",
]

COUNTRIES = [
    "Albania", "Algeria", "Argentina", "Armenia", "Australia", "Austria",
    "Bangladesh", "Belgium", "Bhutan", "Bolivia", "Brazil", "Bulgaria",
    "Cambodia", "Canada", "Chile", "China", "Colombia", "Croatia", "Cuba",
    "Cyprus", "Denmark", "Ecuador", "Egypt", "Estonia", "Ethiopia", "Fiji",
    "Finland", "France", "Georgia", "Germany", "Ghana", "Greece", "Guatemala",
    "Hungary", "Iceland", "India", "Indonesia", "Ireland", "Italy", "Jamaica",
    "Japan", "Jordan", "Kenya", "Laos", "Latvia", "Lebanon", "Lithuania",
    "Madagascar", "Malaysia", "Maldives", "Mali", "Malta", "Mexico",
    "Mongolia", "Morocco", "Nepal", "Netherlands", "Nigeria", "Norway",
    "Oman", "Panama", "Peru", "Philippines", "Poland", "Portugal", "Qatar",
    "Romania", "Rwanda", "Samoa", "Senegal", "Singapore", "Slovenia",
    "Spain", "Sweden", "Switzerland", "Tanzania", "Thailand", "Tonga",
    "Tunisia", "Turkey", "Uganda", "Ukraine", "Uruguay", "Vietnam", "Zambia",
]

SEPARATOR = "-"


def generate_display_name() -> str:
    """Return a name like ``brave-teal-Nepal``"""
    return SEPARATOR.join([
        secrets.choice(ADJECTIVES),
        secrets.choice(COLORS),
        secrets.choice(COUNTRIES),
    ])


def generate_unique_string() -> str:
    """32 hex characters from 16 cryptographically random bytes"""
    return secrets.token_hex(16)
