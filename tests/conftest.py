import pytest

from toolrouter.tools.bundle import MintBundleAnalysis
from toolrouter.tools.telegram import NotificationResponse


@pytest.fixture
def conversation():
    """A short chat asking for a bundle check."""
    return [
        {"role": "user", "content": "hey"},
        {"role": "assistant", "content": "Hi! How can I help?"},
        {"role": "user", "content": "Check the bundles on BONK please"},
    ]


@pytest.fixture
def bundle_analysis_data():
    """Bundle report as the analytics service returns it (camelCase JSON)."""
    sniper = {
        "bundleAddress": "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin",
        "supplyPercentage": 3.456,
        "totalBought": 1500000,
        "totalSold": 250000.5,
        "currentHoldings": 1249999.5,
        "solSpent": 12.345,
        "sellAmount": 3.2,
        "profitLoss": -9.145,
        "firstPurchaseTime": 1700000000000,
        "lastPurchaseTime": 1700000002500,
        "purchaseVelocity": 2160000,
        "transactions": [{"signature": "a"}, {"signature": "b"}],
        "isPumpfunBundle": True,
    }
    coordinated = {
        "bundleAddress": "7GCihgDB8fe6KNjn2MYtkzZcRjQy3t9GHdC8uHYmW2hr",
        "supplyPercentage": 1.2,
        "totalBought": 400000,
        "totalSold": 0,
        "currentHoldings": 400000,
        "solSpent": 4.5,
        "sellAmount": 0,
        "profitLoss": 1.25,
        "firstPurchaseTime": 1700000010000,
        "lastPurchaseTime": 1700000010400,
        "transactions": [{"signature": "c"}, {"signature": "d"}, {"signature": "e"}],
        "isPumpfunBundle": False,
    }
    return {
        "mintAddress": "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263",
        "totalBundles": 2,
        "totalSolSpent": 16.845,
        "totalProfitLoss": -7.895,
        "totalUniqueWallets": 5,
        "totalSupply": 100000000,
        "totalBought": 1900000,
        "totalSold": 250000.5,
        "suspiciousPatterns": {
            "snipers": [sniper],
            "rapidAccumulation": [],
            "coordinatedBuying": [coordinated],
        },
        "largestBundle": sniper,
        "bundles": [sniper, coordinated],
    }


@pytest.fixture
def bundle_analysis(bundle_analysis_data):
    return MintBundleAnalysis.model_validate(bundle_analysis_data)


@pytest.fixture
def sent_ok():
    return NotificationResponse(success=True, bot_id="neur_bot")
