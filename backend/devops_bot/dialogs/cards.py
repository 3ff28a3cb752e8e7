"""Cards enviados pelo bot."""
from botbuilder.core import CardFactory
from botbuilder.schema import ActionTypes, Attachment, CardAction, HeroCard

from devops_bot.dialogs import labels


def main_options_card(commands: list[str]) -> Attachment:
    """Menu com um botão (imBack) por comando registrado."""
    card = HeroCard(
        title=labels.MAIN_OPTIONS_TITLE,
        subtitle=labels.MAIN_OPTIONS_SUBTITLE,
        buttons=[
            CardAction(type=ActionTypes.im_back, title=command, value=command)
            for command in commands
        ],
    )
    return CardFactory.hero_card(card)
