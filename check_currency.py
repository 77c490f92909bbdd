"""Manual check of the currency service against the live rate providers."""
import asyncio
import sys

from dotenv import load_dotenv

from tours_api.config import Settings
from tours_api.services.currency import CurrencyService

load_dotenv()


async def check_currency_service() -> None:
    service = CurrencyService(Settings())
    print("Testing Currency Service...\n")

    print("1. get_exchange_rates()")
    rates = await service.get_exchange_rates()
    print(f"   Last Updated: {rates.last_updated.isoformat()}")
    print(f"   USD Rate: {rates.usd}")
    print(f"   EUR Rate: {rates.eur}")
    print(f"   Is from cache: {rates.from_cache}")
    print("")

    myr_amount = 100
    print("2. convert_to_usd()")
    usd_amount = await service.convert_to_usd(myr_amount)
    print(f"   RM {myr_amount} = ${usd_amount}")
    print("")

    print("3. convert_to_eur()")
    eur_amount = await service.convert_to_eur(myr_amount)
    print(f"   RM {myr_amount} = EUR {eur_amount}")
    print("")

    print("4. Various amounts")
    for amount in [50, 150, 300, 500]:
        usd = await service.convert_to_usd(amount)
        eur = await service.convert_to_eur(amount)
        print(f"   RM {amount} = ${usd} / EUR {eur}")

    cached = await service.get_exchange_rates()
    print(f"\nSecond lookup served from cache: {cached.from_cache}")
    print("\nAll checks passed!")


def main() -> int:
    try:
        asyncio.run(check_currency_service())
    except Exception as e:
        print(f"Check failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
