"""Typer CLI application."""
from __future__ import annotations

import logging
import random
from typing import Optional

import typer

app = typer.Typer(
    name="party-rpg",
    help="Party combat engine for an LLM-narrated text RPG",
    no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _demo_rosters(team_size: int):
    from party_rpg.mechanics.character_creation import create_companion, create_enemy, create_hero
    from party_rpg.mechanics.party import build_party, recruit

    hero = create_hero("Aldric", "warrior")
    team: list = []
    for companion in (
        create_companion("Mira", "healer", personality="calm and watchful"),
        create_companion("Fenn", "mage", personality="reckless and proud"),
    ):
        recruit(team, companion, team_size)
    enemies = [
        create_enemy("Bandit Captain", role="warrior"),
        create_enemy("Hedge Witch", role="mage"),
        create_enemy("Bandit", role=""),
    ]
    return hero, build_party(hero, team), enemies


@app.command()
def simulate(
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible dice"),
    max_rounds: int = typer.Option(20, "--max-rounds", help="Flee after this many rounds"),
    use_llm: bool = typer.Option(False, "--llm", help="Use the configured LLM for companions and narration"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine debug logging"),
) -> None:
    """Run a demo encounter and print every round."""
    from party_rpg.agents.combat_narrator import CombatNarrator
    from party_rpg.agents.companion_agent import LLMCompanionAgent, RuleBasedCompanionAgent
    from party_rpg.cli.combat_display import CombatDisplay
    from party_rpg.config import combat_rules, load_config, max_team_size
    from party_rpg.engine.action_resolver import ActionResolver
    from party_rpg.engine.combat_engine import CombatEngine

    _setup_logging(verbose)
    config = load_config()
    rules = combat_rules(config)

    llm = None
    if use_llm:
        from party_rpg.llm.ollama_provider import OllamaProvider

        llm = OllamaProvider.from_config(config)
    decider = LLMCompanionAgent(llm) if llm else RuleBasedCompanionAgent(rules)
    narrator = CombatNarrator(llm)
    display = CombatDisplay()

    resolver = ActionResolver(rng=random.Random(seed), decider=decider, rules=rules)
    engine = CombatEngine(resolver, rules)

    hero, party, enemies = _demo_rosters(max_team_size(config))
    encounter = engine.start_encounter(party, enemies, location="Old Mill Road")
    display.show_combat_start(encounter, narrator.narrate_start(encounter))

    while encounter.is_active():
        if encounter.current_turn > max_rounds:
            engine.flee(encounter)
            break
        display.show_roster(encounter)
        actions = engine.execute_round(encounter)
        display.show_actions(actions, [narrator.narrate_action(a) for a in actions])

    display.show_roster(encounter)
    display.show_outcome(encounter, narrator.narrate_end(encounter))
    display.console.print(f"{hero.name}: level {hero.level}, {hero.experience} XP")


@app.command()
def check() -> None:
    """Check whether the configured LLM is reachable."""
    from party_rpg.config import load_config
    from party_rpg.llm.ollama_provider import OllamaProvider

    provider = OllamaProvider.from_config(load_config())
    if provider.is_available():
        typer.echo(f"LLM model '{provider.model_name}' is available at {provider.base_url}")
    else:
        typer.echo(f"LLM model '{provider.model_name}' not reachable at {provider.base_url}", err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
