"""
Public API Example

This example demonstrates how to use Independent Reserve's public API
endpoints. No authentication is required for these endpoints - they provide
market data available to everyone.

Endpoints covered:
- Valid currency codes and order types
- Market summary
- Order book
- Recent trades
- FX rates
"""

from independent_reserve import IndependentReserveClient, get_version, print_data


def example_public_api() -> None:
    """Demonstrate the public API endpoints without authentication."""

    print("=" * 70)
    print("Independent Reserve Public API Example")
    print("=" * 70)

    print(f"\n[Info] SDK Version: {get_version()}\n")

    # Initialize client without authentication (for public endpoints only)
    client = IndependentReserveClient()

    print("\n[Currencies] Primary:")
    print_data(client.get_valid_primary_currency_codes())
    print("\n[Currencies] Secondary:")
    print_data(client.get_valid_secondary_currency_codes())

    print("\n[Order Types] Market:")
    print_data(client.get_valid_market_order_types())

    summary = client.get_market_summary("Xbt", "Aud")
    print(f"\n[Xbt/Aud] Last price: {summary['LastPrice']}")
    print(f"  Best bid:   {summary['CurrentHighestBidPrice']}")
    print(f"  Best offer: {summary['CurrentLowestOfferPrice']}")

    order_book = client.get_order_book("Xbt", "Aud")
    print("\n[Order Book] Top of book:")
    for bid, offer in zip(order_book["BuyOrders"][:5], order_book["SellOrders"][:5]):
        print(f"  {bid['Volume']:>12} @ {bid['Price']:<12} | {offer['Price']:>12} @ {offer['Volume']}")

    trades = client.get_recent_trades("Xbt", "Aud", 5)
    print("\n[Recent Trades]")
    print_data(trades)

    print("\n[FX Rates]")
    print_data(client.get_fx_rates())

    print(f"\n[Volume] Minimum Xbt order: {client.get_min_volume_for('Xbt')}")
    print(f"[Volume] Xbt decimals: {client.get_volume_decimals_for('Xbt')}")


if __name__ == "__main__":
    example_public_api()
