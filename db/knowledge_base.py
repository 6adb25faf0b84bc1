# db/knowledge_base.py - Static tables of known chemicals and precomputed pair outcomes.
# Loaded once per process and never mutated. Keep names/formulas/aliases unique across
# chemicals and keep one rule per pair; db.aliases and db.query refuse to index otherwise.

from typing import Tuple

from .schema import ChemicalIdentity, ReactionOutcome, ReactionRule, SafetyLevel


class KnowledgeBaseError(ValueError):
    """The static tables violate an integrity precondition (duplicate key, dangling id...)."""

CHEMICALS: Tuple[ChemicalIdentity, ...] = (
    ChemicalIdentity("water", "Water", "H2O", ("distilled water", "tap water", "dihydrogen monoxide")),
    ChemicalIdentity("bleach", "Sodium Hypochlorite", "NaOCl", ("bleach", "chlorine bleach", "hypochlorite")),
    ChemicalIdentity("ammonia", "Ammonia", "NH3", ("ammonium hydroxide", "ammonia solution", "household ammonia")),
    ChemicalIdentity("hcl", "Hydrochloric Acid", "HCl", ("muriatic acid", "hydrogen chloride")),
    ChemicalIdentity("naoh", "Sodium Hydroxide", "NaOH", ("lye", "caustic soda")),
    ChemicalIdentity("vinegar", "Acetic Acid", "CH3COOH", ("vinegar", "ethanoic acid", "white vinegar")),
    ChemicalIdentity("baking_soda", "Sodium Bicarbonate", "NaHCO3", ("baking soda", "bicarbonate of soda")),
    ChemicalIdentity("h2o2", "Hydrogen Peroxide", "H2O2", ("peroxide",)),
    ChemicalIdentity("acetone", "Acetone", "C3H6O", ("propanone", "nail polish remover")),
    ChemicalIdentity("ethanol", "Ethanol", "C2H5OH", ("ethyl alcohol", "alcohol", "grain alcohol")),
    ChemicalIdentity("isopropanol", "Isopropyl Alcohol", "C3H8O", ("rubbing alcohol", "isopropanol", "ipa")),
    ChemicalIdentity("h2so4", "Sulfuric Acid", "H2SO4", ("sulphuric acid", "oil of vitriol", "battery acid")),
    ChemicalIdentity("sodium", "Sodium", "Na", ("sodium metal",)),
    ChemicalIdentity("salt", "Sodium Chloride", "NaCl", ("table salt", "salt", "rock salt")),
    ChemicalIdentity("sugar", "Sucrose", "C12H22O11", ("sugar", "table sugar")),
)

_CHLORINE_GAS_TIPS = (
    "Do not mix",
    "Ventilate the area immediately if mixed",
    "Leave the area and seek fresh air",
    "Seek medical attention for breathing difficulty",
)

REACTION_RULES: Tuple[ReactionRule, ...] = (
    ReactionRule.between("bleach", "ammonia", ReactionOutcome(
        SafetyLevel.DANGEROUS,
        "Toxic Chloramine Gas",
        "Mixing bleach with ammonia releases chloramine vapours, which cause severe "
        "respiratory irritation and can be fatal in enclosed spaces.",
        _CHLORINE_GAS_TIPS,
    )),
    ReactionRule.between("bleach", "hcl", ReactionOutcome(
        SafetyLevel.DANGEROUS,
        "Chlorine Gas Release",
        "Acids liberate chlorine gas from hypochlorite. Chlorine is a toxic, "
        "choking gas even at low concentrations.",
        _CHLORINE_GAS_TIPS,
    )),
    ReactionRule.between("bleach", "vinegar", ReactionOutcome(
        SafetyLevel.DANGEROUS,
        "Chlorine Gas Release",
        "Even a weak acid such as vinegar lowers the pH of bleach enough to release "
        "chlorine gas.",
        _CHLORINE_GAS_TIPS,
    )),
    ReactionRule.between("bleach", "h2o2", ReactionOutcome(
        SafetyLevel.EXOTHERMIC,
        "Rapid Oxygen Release",
        "Hypochlorite decomposes hydrogen peroxide violently, releasing oxygen gas and "
        "heat. Concentrated solutions can splash or rupture closed containers.",
        ("Do not mix in closed containers", "Wear eye protection", "Keep away from flammables"),
    )),
    ReactionRule.between("bleach", "isopropanol", ReactionOutcome(
        SafetyLevel.DANGEROUS,
        "Chloroform Formation",
        "Bleach reacts with isopropyl alcohol to form chloroform and other chlorinated "
        "compounds that are toxic to the liver and nervous system.",
        ("Do not mix", "Ventilate the area", "Store the products separately"),
    )),
    ReactionRule.between("bleach", "acetone", ReactionOutcome(
        SafetyLevel.DANGEROUS,
        "Chloroform Formation",
        "The haloform reaction between hypochlorite and acetone produces chloroform, "
        "a toxic and volatile liquid.",
        ("Do not mix", "Ventilate the area", "Store the products separately"),
    )),
    ReactionRule.between("vinegar", "baking_soda", ReactionOutcome(
        SafetyLevel.MILD,
        "Acid-Base Fizz",
        "Acetic acid neutralises sodium bicarbonate, producing carbon dioxide bubbles, "
        "water and sodium acetate.",
        ("Use an open container", "Expect foaming"),
    )),
    ReactionRule.between("hcl", "baking_soda", ReactionOutcome(
        SafetyLevel.MILD,
        "Acid-Base Fizz",
        "Hydrochloric acid reacts with sodium bicarbonate to give carbon dioxide, water "
        "and table salt. Vigorous foaming occurs with concentrated acid.",
        ("Add slowly", "Use an open container", "Wear eye protection"),
    )),
    ReactionRule.between("hcl", "naoh", ReactionOutcome(
        SafetyLevel.EXOTHERMIC,
        "Neutralization",
        "A strong acid and a strong base neutralise each other to form salt and water, "
        "releasing significant heat.",
        ("Add slowly with stirring", "Wear gloves and goggles", "Use heat-resistant glassware"),
    )),
    ReactionRule.between("h2so4", "water", ReactionOutcome(
        SafetyLevel.EXOTHERMIC,
        "Heat of Dilution",
        "Diluting sulfuric acid releases a large amount of heat that can boil the water "
        "locally and spatter acid.",
        ("Always add acid to water, never water to acid", "Add slowly with stirring",
         "Wear a face shield"),
    )),
    ReactionRule.between("h2so4", "acetone", ReactionOutcome(
        SafetyLevel.EXTREME,
        "Violent Decomposition",
        "Concentrated sulfuric acid reacts violently with acetone. The reaction is highly "
        "exothermic and can lead to a violent eruption.",
        ("Do not mix", "Keep acids away from organic solvents", "Evacuate if mixed accidentally"),
    )),
    ReactionRule.between("sodium", "water", ReactionOutcome(
        SafetyLevel.EXTREME,
        "Violent Metal-Water Reaction",
        "Sodium metal reacts with water to form sodium hydroxide and hydrogen gas; the "
        "heat released ignites the hydrogen.",
        ("Never let sodium contact water", "Store sodium under mineral oil",
         "Use a class D extinguisher for metal fires"),
    )),
    ReactionRule.between("h2o2", "vinegar", ReactionOutcome(
        SafetyLevel.DANGEROUS,
        "Peracetic Acid Formation",
        "Combining hydrogen peroxide and vinegar forms peracetic acid, which is corrosive "
        "to skin, eyes and lungs.",
        ("Do not store mixed", "Use them sequentially, not together", "Ventilate the area"),
    )),
    ReactionRule.between("salt", "water", ReactionOutcome(
        SafetyLevel.SAFE,
        "Simple Dissolution",
        "Sodium chloride dissolves in water without a chemical reaction.",
        ("No special precautions needed",),
    )),
    ReactionRule.between("sugar", "water", ReactionOutcome(
        SafetyLevel.SAFE,
        "Simple Dissolution",
        "Sucrose dissolves in water without a chemical reaction.",
        ("No special precautions needed",),
    )),
    ReactionRule.between("ethanol", "water", ReactionOutcome(
        SafetyLevel.SAFE,
        "Miscible Mixing",
        "Ethanol and water mix in all proportions with a slight warming and volume "
        "contraction. The mixture remains flammable at high ethanol content.",
        ("Keep away from open flames",),
    )),
)
