"""Markdown-flavoured text reports returned by the tools."""

import json
from collections.abc import Sequence
from datetime import datetime
from decimal import Decimal

from wallet_analyzer.core.advisor.swap_advisor import (
    GasSavingsEstimate,
    HistoricalProfile,
    SwapRecommendation,
)
from wallet_analyzer.core.analysis import (
    analyze_time_patterns,
    daily_average,
    days_between,
    gas_stats,
    summarize,
)
from wallet_analyzer.data.models.analytics import TimePatterns
from wallet_analyzer.data.models.transaction import TransactionRecord
from wallet_analyzer.services.oneinch.models import SwapQuote

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
HASH_PREFIX_LENGTH = 16
MAX_PROTOCOLS_SHOWN = 3


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def bullets(lines: Sequence[str]) -> str:
    return "\n".join(f"• {line}" for line in lines)


class ReportFormatter:
    """Render analytics and advice as text.

    Every method recomputes what it needs from the transaction list; the
    formatter holds no state.
    """

    def summary(self, transactions: Sequence[TransactionRecord], wallet_address: str) -> str:
        """Short overview: counts, ETH volumes, gas and activity period."""
        stats = summarize(transactions)

        return f"""
🔍 **Wallet Analysis: {wallet_address}**

📊 **Overview:**
• Total Transactions: {stats.total_txns:,}
• Success Rate: {stats.success_rate}%
• Outgoing: {stats.outgoing_count:,}
• Incoming: {stats.incoming_count:,}

💰 **ETH Activity:**
• Total Sent: {stats.total_sent:.4f} ETH
• Total Received: {stats.total_received:.4f} ETH
• Net Balance: {stats.net_balance:.4f} ETH
• Gas Fees Paid: {stats.total_gas_fees:.4f} ETH

⛽ **Gas Statistics:**
• Average Gas Price: {stats.avg_gas_price:.1f} Gwei
• Total Gas Used: {stats.total_gas_used:,}

📅 **Activity Period:**
• Latest Transaction: {format_timestamp(stats.latest_tx)}
• First Transaction: {format_timestamp(stats.first_tx)}
""".strip()

    def detailed(self, transactions: Sequence[TransactionRecord], wallet_address: str) -> str:
        """Full report with failure rate, gas distribution and activity patterns."""
        stats = summarize(transactions)
        gas = gas_stats(transactions)
        patterns = analyze_time_patterns(transactions)

        return f"""
🔍 **Detailed Wallet Analysis: {wallet_address}**

📊 **Transaction Metrics:**
• Total Transactions: {stats.total_txns:,}
• Successful: {stats.successful_txns:,} ({stats.success_rate}%)
• Failed: {stats.failed_txns:,} ({stats.failure_rate}%)
• Outgoing vs Incoming: {stats.outgoing_count}:{stats.incoming_count}

💰 **Financial Summary:**
• ETH Sent: {stats.total_sent:.6f} ETH
• ETH Received: {stats.total_received:.6f} ETH
• Net Position: {stats.net_balance:.6f} ETH
• Total Gas Spent: {stats.total_gas_fees:.6f} ETH

⛽ **Advanced Gas Analysis:**
• Average Gas Price: {gas.avg:.2f} Gwei
• Median Gas Price: {gas.median:.2f} Gwei
• Highest Gas Price: {gas.max:.2f} Gwei
• Lowest Gas Price: {gas.min:.2f} Gwei
• Total Gas Used: {stats.total_gas_used:,}
• Average Gas per Transaction: {stats.avg_gas_per_tx:.0f}

📈 **Activity Patterns:**
{self.time_patterns(patterns)}
• Average Transactions per Day: {daily_average(transactions):.1f}

📅 **Timeline:**
• First Transaction: {format_timestamp(stats.first_tx)}
• Latest Transaction: {format_timestamp(stats.latest_tx)}
• Analysis Period: {days_between(stats.first_tx, stats.latest_tx)} days
""".strip()

    def raw(self, transactions: Sequence[TransactionRecord]) -> str:
        """JSON array of the records keyed by provider column names."""
        return json.dumps([tx.model_dump(mode="json") for tx in transactions], indent=2)

    def recent_transactions(self, transactions: Sequence[TransactionRecord]) -> str:
        if not transactions:
            return "No recent transactions found."

        blocks = [f"🕐 **Recent Transactions ({len(transactions)})**"]
        for index, tx in enumerate(transactions, start=1):
            direction_marker = "📤" if tx.is_outgoing else "📥"
            status_marker = "✅" if tx.success else "❌"
            blocks.append(
                f"{index}. {direction_marker} **{tx.direction.value}** {status_marker}\n"
                f"   • Amount: {tx.eth_amount:.4f} ETH\n"
                f"   • Fee: {tx.total_fee_eth:.5f} ETH ({tx.gas_price_gwei:.1f} Gwei)\n"
                f"   • Date: {format_timestamp(tx.block_time)}\n"
                f"   • Hash: `{tx.transaction_hash[:HASH_PREFIX_LENGTH]}...`\n"
                f"   • Block: {tx.block_number:,}"
            )
        return "\n\n".join(blocks)

    def time_patterns(self, patterns: TimePatterns) -> str:
        return (
            f"• Most Active Hour: {patterns.most_active_hour}:00 UTC\n"
            f"• Most Active Day: {patterns.most_active_day}"
        )

    def swap_analysis(
        self,
        recommendation: SwapRecommendation,
        quote: SwapQuote,
        output_amount: Decimal,
        profile: HistoricalProfile,
    ) -> str:
        """Smart-swap report: quote, trading history and recommendations.

        Args:
            recommendation: Advice built by SwapAdvisor.recommend.
            quote: Live quote the advice was built from.
            output_amount: quote.dst_amount in destination token units.
            profile: Successful-transaction swap proxy.
        """
        stats = recommendation.summary
        protocols = quote.protocol_names[:MAX_PROTOCOLS_SHOWN]

        return f"""
🔄 **Smart Swap Analysis: {recommendation.from_token} → {recommendation.to_token}**

💱 **Current Market Quote:**
• Input: {recommendation.amount} {recommendation.from_token}
• Output: {output_amount:.6f} {recommendation.to_token}
• Estimated Gas: {quote.estimated_gas:,} units
• Est. Gas Cost: ~{recommendation.estimated_gas_cost_eth:.4f} ETH

📊 **Your Trading History:**
• Total Transactions: {stats.total_txns:,}
• Success Rate: {stats.success_rate}%
• Successful Transactions: {profile.swap_count:,} (avg {profile.avg_gas_price:.1f} Gwei)
• Average Gas Price Used: {stats.avg_gas_price:.1f} Gwei
• Total Gas Fees Paid: {stats.total_gas_fees:.4f} ETH

🎯 **Personalized Recommendations:**
{bullets(recommendation.lines)}

⚡ **Protocols Used:** {", ".join(protocols) if protocols else "N/A"}
""".strip()

    def gas_analysis(self, transactions: Sequence[TransactionRecord], recommendations: Sequence[str]) -> str:
        """Gas usage distribution, timing and optimization tips."""
        gas = gas_stats(transactions)
        stats = summarize(transactions)
        patterns = analyze_time_patterns(transactions)

        return f"""
⛽ **Gas Optimization Analysis**

📊 **Your Gas Usage Patterns:**
• Average Gas Price: {gas.avg:.2f} Gwei
• Median Gas Price: {gas.median:.2f} Gwei
• Lowest Gas Used: {gas.min:.2f} Gwei
• Highest Gas Used: {gas.max:.2f} Gwei
• Total Gas Fees: {stats.total_gas_fees:.4f} ETH

📅 **Timing Analysis:**
{self.time_patterns(patterns)}

💡 **Optimization Recommendations:**
{bullets(recommendations)}
""".strip()

    def swap_gas_section(self, estimate: GasSavingsEstimate, from_token: str, to_token: str) -> str:
        """Swap-specific addendum to the gas report."""
        targets = "\n".join(
            f"• If you wait for {price:.0f} Gwei: ~{cost:.4f} ETH" for price, cost in estimate.target_costs
        )
        savings_note = ""
        if estimate.potential_savings == 0:
            lowest = estimate.target_costs[-1][0]
            savings_note = f"\n• Your average is already at or below {lowest:.0f} Gwei, so waiting saves nothing"

        return f"""

🔄 **Swap-Specific Gas Optimization:**
• Estimated Gas for {from_token}→{to_token}: {estimate.estimated_gas:,} units
• Your Avg Gas Price: {estimate.avg_gas_price:.1f} Gwei
• Estimated Cost: ~{estimate.cost_at_average:.4f} ETH

💰 **Cost Optimization:**
{targets}
• Potential Savings: Up to {estimate.potential_savings:.4f} ETH{savings_note}"""
