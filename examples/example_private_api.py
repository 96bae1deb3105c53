"""
Private API Example

This example demonstrates the signed private endpoints. Credentials are read
from the environment (or a .env file), see independent_reserve/env_setup.py.

It only reads account state; it does not place or cancel orders.
"""

from independent_reserve import (
    IndependentReserveClient,
    IndependentReserveError,
    print_data,
)


def example_private_api() -> None:
    client = IndependentReserveClient.from_environment()
    if not client.has_credentials:
        print("Set INDEPENDENT_RESERVE_API_KEY_PRODUCTION and INDEPENDENT_RESERVE_API_SECRET_PRODUCTION first")
        return

    try:
        accounts = client.get_accounts()
    except IndependentReserveError as e:
        print(f"[Error] The exchange rejected the request: {e.message}")
        return

    print("\n[Accounts]")
    for account in accounts:
        print(f"  {account['CurrencyCode']:<6} {account['AvailableBalance']:>18} available")

    print("\n[Open Orders]")
    print_data(client.get_open_orders(page_size=10))

    print("\n[Brokerage Fees]")
    print_data(client.get_brokerage_fees())


if __name__ == "__main__":
    example_private_api()
