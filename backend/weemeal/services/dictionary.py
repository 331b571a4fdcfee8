# weemeal/services/dictionary.py
# German recipe name -> English image-search phrase, without any network call
# Fallback when AI translation is not configured or fails.
# Substring replacement is unanchored (e.g. "ei" also fires inside longer words);
# compound dish names must therefore be tried before their parts.

from __future__ import annotations

import re
from typing import List, Tuple

from weemeal.services.utils import collapse_spaces, normalize_phrase

# (german, english), grouped for maintenance; applied longest term first
GERMAN_FOOD_TRANSLATIONS: List[Tuple[str, str]] = [
    # compound dishes
    ("kartoffelauflauf", "potato casserole"),
    ("nudelauflauf", "pasta casserole baked"),
    ("gemüseauflauf", "vegetable casserole"),
    ("kartoffelsalat", "potato salad"),
    ("kartoffelpuffer", "potato fritters pancakes"),
    ("kartoffelsuppe", "potato soup"),
    ("kartoffelbrei", "mashed potatoes"),
    ("kartoffelknödel", "potato dumplings"),
    ("bratkartoffeln", "fried potatoes"),
    ("pellkartoffeln", "boiled potatoes"),
    ("schwarzwälder", "black forest"),
    ("schweinebraten", "roast pork"),
    ("rinderbraten", "roast beef"),
    ("sauerbraten", "marinated roast beef"),
    ("schweinefleisch", "pork meat"),
    ("rindfleisch", "beef meat"),
    ("hackfleisch", "ground meat minced"),
    ("hühnerfleisch", "chicken meat"),
    ("putenfleisch", "turkey meat"),
    ("lammfleisch", "lamb meat"),
    ("fleischbällchen", "meatballs"),
    ("frikadellen", "meatballs german"),
    ("königsberger", "koenigsberg meatballs"),
    ("käsekuchen", "cheesecake"),
    ("apfelkuchen", "apple cake pie"),
    ("pflaumenkuchen", "plum cake"),
    ("streuselkuchen", "crumble cake"),
    ("bienenstich", "bee sting cake"),
    ("apfelstrudel", "apple strudel pastry"),
    ("kaiserschmarrn", "shredded pancake austrian"),
    ("pfannkuchen", "pancakes german"),
    ("reibekuchen", "potato pancakes"),
    ("milchreis", "rice pudding"),
    ("grießbrei", "semolina pudding"),
    ("leberkäse", "meatloaf bavarian"),
    ("weißwurst", "white sausage bavarian"),
    ("currywurst", "curry sausage"),
    ("bratwurst", "grilled sausage"),
    ("bockwurst", "boiled sausage"),
    ("knackwurst", "crackling sausage"),
    ("blutwurst", "blood sausage"),
    ("leberwurst", "liver sausage pate"),
    ("sauerkraut", "sauerkraut fermented cabbage"),
    ("rotkohl", "red cabbage"),
    ("grünkohl", "kale green"),
    ("rosenkohl", "brussels sprouts"),
    ("blumenkohl", "cauliflower"),
    ("weißkohl", "white cabbage"),
    ("wirsing", "savoy cabbage"),
    ("kohlrabi", "kohlrabi"),
    ("spargel", "asparagus"),
    ("erbsensuppe", "pea soup"),
    ("linsensuppe", "lentil soup"),
    ("gulaschsuppe", "goulash soup"),
    ("hühnersuppe", "chicken soup"),
    ("tomatensuppe", "tomato soup"),
    ("zwiebelsuppe", "onion soup"),
    ("semmelknödel", "bread dumplings"),
    ("spätzle", "spaetzle german egg noodles"),
    ("maultaschen", "german ravioli dumplings"),
    ("schupfnudeln", "finger shaped potato noodles"),
    # simple dishes
    ("auflauf", "casserole baked"),
    ("eintopf", "stew one pot"),
    ("braten", "roast"),
    ("schnitzel", "schnitzel breaded cutlet"),
    ("gulasch", "goulash stew"),
    ("roulade", "roulade rolled meat"),
    ("frikadelle", "meatball"),
    ("bulette", "meatball"),
    ("knödel", "dumpling"),
    ("kloß", "dumpling"),
    ("klöße", "dumplings"),
    # proteins
    ("hähnchen", "chicken"),
    ("hühnchen", "chicken"),
    ("huhn", "chicken"),
    ("pute", "turkey"),
    ("ente", "duck"),
    ("gans", "goose"),
    ("rind", "beef"),
    ("schwein", "pork"),
    ("lamm", "lamb"),
    ("kalb", "veal"),
    ("wild", "game venison"),
    ("hirsch", "deer venison"),
    ("hase", "rabbit"),
    ("kaninchen", "rabbit"),
    ("lachs", "salmon"),
    ("forelle", "trout"),
    ("kabeljau", "cod"),
    ("thunfisch", "tuna"),
    ("hering", "herring"),
    ("makrele", "mackerel"),
    ("garnelen", "shrimp prawns"),
    ("krabben", "crab shrimp"),
    ("muscheln", "mussels"),
    ("tintenfisch", "squid calamari"),
    ("fisch", "fish"),
    ("fleisch", "meat"),
    ("wurst", "sausage"),
    ("schinken", "ham"),
    ("speck", "bacon"),
    ("eier", "eggs"),
    ("ei", "egg"),
    # vegetables
    ("kartoffeln", "potatoes"),
    ("kartoffel", "potato"),
    ("tomaten", "tomatoes"),
    ("tomate", "tomato"),
    ("zwiebeln", "onions"),
    ("zwiebel", "onion"),
    ("knoblauch", "garlic"),
    ("paprika", "bell pepper"),
    ("gurke", "cucumber"),
    ("karotte", "carrot"),
    ("möhren", "carrots"),
    ("möhre", "carrot"),
    ("zucchini", "zucchini"),
    ("aubergine", "eggplant"),
    ("brokkoli", "broccoli"),
    ("spinat", "spinach"),
    ("champignon", "mushroom"),
    ("pilze", "mushrooms"),
    ("pilz", "mushroom"),
    ("bohnen", "beans"),
    ("erbsen", "peas"),
    ("linsen", "lentils"),
    ("mais", "corn"),
    ("kürbis", "pumpkin squash"),
    ("sellerie", "celery"),
    ("lauch", "leek"),
    ("porree", "leek"),
    ("fenchel", "fennel"),
    ("rote bete", "beetroot"),
    ("radieschen", "radish"),
    ("rettich", "radish daikon"),
    ("gemüse", "vegetables"),
    ("salat", "salad lettuce"),
    # carbs & grains
    ("nudeln", "pasta noodles"),
    ("spaghetti", "spaghetti"),
    ("reis", "rice"),
    ("brötchen", "bread roll"),
    ("brot", "bread"),
    ("semmel", "bread roll"),
    ("mehl", "flour"),
    ("grieß", "semolina"),
    ("haferflocken", "oatmeal oats"),
    # dairy
    ("käse", "cheese"),
    ("milch", "milk"),
    ("sahne", "cream"),
    ("butter", "butter"),
    ("joghurt", "yogurt"),
    ("quark", "quark cottage cheese"),
    # fruit
    ("apfel", "apple"),
    ("birne", "pear"),
    ("orange", "orange"),
    ("zitrone", "lemon"),
    ("erdbeere", "strawberry"),
    ("himbeere", "raspberry"),
    ("heidelbeere", "blueberry"),
    ("kirsche", "cherry"),
    ("pflaume", "plum"),
    ("traube", "grape"),
    ("banane", "banana"),
    ("obst", "fruit"),
    # cooking methods & descriptions
    ("gebraten", "fried pan-fried"),
    ("gegrillt", "grilled bbq"),
    ("gebacken", "baked oven"),
    ("gekocht", "boiled cooked"),
    ("gedünstet", "steamed"),
    ("geschmort", "braised stewed"),
    ("überbacken", "gratinated baked cheese"),
    ("gefüllt", "stuffed filled"),
    ("paniert", "breaded"),
    ("mariniert", "marinated"),
    ("geräuchert", "smoked"),
    ("frisch", "fresh"),
    ("hausgemacht", "homemade"),
    ("klassisch", "classic traditional"),
    ("cremig", "creamy"),
    ("knusprig", "crispy crunchy"),
    ("würzig", "spicy seasoned"),
    ("süß", "sweet"),
    ("sauer", "sour"),
    ("scharf", "spicy hot"),
    # sauces & condiments
    ("bratensoße", "gravy"),
    ("tomatensoße", "tomato sauce"),
    ("rahmsoße", "cream sauce"),
    ("soße", "sauce gravy"),
    ("sauce", "sauce"),
    ("senf", "mustard"),
    ("ketchup", "ketchup"),
    ("mayonnaise", "mayonnaise"),
    ("essig", "vinegar"),
    ("öl", "oil"),
    # meals
    ("suppe", "soup"),
    ("vorspeise", "appetizer starter"),
    ("hauptgericht", "main course"),
    ("beilage", "side dish"),
    ("nachtisch", "dessert"),
    ("dessert", "dessert"),
    ("kuchen", "cake"),
    ("torte", "cake torte"),
    ("gebäck", "pastry"),
    ("keks", "cookie biscuit"),
    ("plätzchen", "cookies"),
    # filler words
    ("mit", "with"),
    ("und", "and"),
    ("oder", "or"),
    ("nach", "style"),
    ("art", "style"),
    ("oma", "grandma traditional"),
    ("mama", "mom homestyle"),
]


def _ordered(pairs: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
    # longest German term first; ties keep table order (sorted is stable)
    return sorted(pairs, key=lambda p: len(p[0]), reverse=True)


_ORDERED = _ordered(GERMAN_FOOD_TRANSLATIONS)
_LOOKUP = dict(_ORDERED)

# One left-to-right pass: at every position the longest listed term wins,
# and replaced English text is never matched again.
_PATTERN = re.compile("|".join(re.escape(de) for de, _ in _ORDERED))


def dictionary_translate(recipe_name: str) -> str:
    text = normalize_phrase(recipe_name)
    if not text:
        return ""
    text = _PATTERN.sub(lambda m: _LOOKUP[m.group(0)], text)
    return collapse_spaces(text)
