"""Canned tools used by the command-line demo.

The results are hard-coded; they exist so the shopping and banking
specialists have something to call when the relay runs against a real
model.
"""

from langchain_core.tools import tool

import json
from datetime import datetime

from agent_relay.tools import ToolRegistry


@tool
def current_datetime() -> str:
    """
    Returns the current date and time.
    Use this when the user asks about the current date or time.
    """
    now = datetime.now()
    return now.strftime("Today is %Y-%m-%d and the current time is %H:%M:%S")


@tool
def search_products(query: str) -> str:
    """
    Search for products on Amazon (amazon.com) by keyword or description.
    Returns a JSON list of product descriptions and prices in USD. Output the
    results as a numbered list so the user can refer to them easily.
    """
    return json.dumps([
        {"description": "T-shirt", "price": 20},
        {"description": "Dress shirt", "price": 50},
        {"description": "Long sleeve shirt", "price": 35},
    ])


@tool
def credit_card_balance() -> str:
    """
    Retrieve the balance and credit limit for the user's primary credit card.
    This tool does not require any input.
    """
    return "The user has a balance of 2,000 USD and a credit limit of 10,000 USD."


def demo_catalog() -> ToolRegistry:
    """Shared catalog the demo agents select their tools from."""
    return ToolRegistry([current_datetime, search_products, credit_card_balance])


# domain -> (description, tool names)
DEMO_SPECIALISTS = {
    "shopping": ("online shopping, product search and purchases", ["search_products"]),
    "banking": ("online banking, balances and credit cards", ["credit_card_balance"]),
}

GENERAL_TOOL_NAMES = ["current_datetime"]
