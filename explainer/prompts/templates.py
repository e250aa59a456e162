"""
Prompt templates for the completion API
"""
import json


def get_explanation_prompt(tx: dict, receipt: dict, network: str) -> str:
    """Build the single user message sent to the completion API.

    Embeds the full transaction and receipt so the model sees every clause,
    event and transfer, not just the normalized fields.
    """
    tx_json = json.dumps(tx, indent=2)
    receipt_json = json.dumps(receipt, indent=2)

    return f"""You are a blockchain transaction explainer for the VeChain network. Analyze the complete transaction data below and write a detailed, well-formatted explanation.

COMPLETE TRANSACTION DATA:
{tx_json}

COMPLETE TRANSACTION RECEIPT DATA:
{receipt_json}

NETWORK: {network}

Instructions:
1. Analyze ALL of the provided data - do not skip important details
2. Write a detailed explanation of 2-4 sentences with proper formatting
3. Use **bold** for important terms such as contract names, amounts and addresses
4. Always show COMPLETE addresses - never shorten them (write 0x1234567890abcdef1234567890abcdef12345678, not 0x1234...5678)
5. Give amounts with full precision when available
6. Name the exact function called if this is a contract interaction
7. Include gas used, gas limit, fees and block information
8. Look at ALL events, transfers and outputs for context
9. If there are multiple clauses, explain each one
10. Separate different aspects of the transaction with line breaks
11. Put technical details in parentheses for readers who want them
12. Convert hex values to readable amounts where appropriate
13. Mention the exact block number and timestamp if available
14. Explain the purpose or type of the contract if it can be identified
15. Stay informative but accessible

Format guidelines:
- **bold** for addresses, amounts, contract names and block numbers
- *italics* for technical details or extra context
- Blank lines between paragraphs
- Exact gas used, gas limit and fee calculations
- Both hex and converted values where relevant

Example:
This transaction successfully called the **VeChain Energy (VTHO) contract** at **0x0000000000000000000000000000456e65726779** to transfer **10,000 VTHO tokens** from **0x2d7c8293b20344223668ed3fd88301381dc35ce0** to **0x11e1b586dd371471d0b52046ee3d4309a6c29c6c**.

The transaction was confirmed in **block #12345678** and consumed **36,582 gas** out of the **90,000 gas limit**, costing approximately **0.0514 VET** in fees.

*Technical details: the standard ERC20 transfer function (method signature 0xa9059cbb) was used and a Transfer event was emitted. No VET moved directly - only VTHO tokens changed hands.*"""
