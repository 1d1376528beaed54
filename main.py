"""Command-line entry point for the position sizing engine.

Prints the full recommendation panel (position, risk/reward, Kelly,
stop-loss, portfolio impact) for one market signal.
"""

import argparse
import sys
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from data.errors import SizingError
from sizing.engine import Recommendation, SizingDefaults, SizingEngine


# Load environment variables
load_dotenv()


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{module}</cyan> | <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {module}:{function} | {message}"


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Route sizing logs to stderr and, optionally, a rotating file.
    
    Replaces any sinks already installed, so calling it twice is safe.
    """
    handlers = [
        {"sink": sys.stderr, "level": log_level, "format": CONSOLE_FORMAT, "colorize": True},
    ]
    if log_file:
        handlers.append({
            "sink": log_file,
            "level": log_level,
            "format": FILE_FORMAT,
            "rotation": "5 MB",
            "retention": 3,
        })
    logger.configure(handlers=handlers)


def format_recommendation(rec: Recommendation) -> str:
    """Render a recommendation as a plain-text panel."""
    signal = rec.request.signal
    lines = [
        "=" * 60,
        f"SIGNAL | Model: {signal.model_probability:.1f}% | Market: {signal.market_odds:.1f}% | "
        f"Edge: {signal.edge:+.1f}pt",
        f"INVESTMENT | ${rec.request.investment:.2f}",
        "=" * 60,
    ]
    
    if rec.position:
        p = rec.position
        lines += [
            "POSITION",
            f"  Shares: {p.shares:.2f} | Payout if win: ${p.potential_payout:.2f}",
            f"  Profit if win: ${p.profit_if_win:+.2f} | ROI: {p.roi_if_win:+.1f}%",
            f"  Expected value: ${p.expected_value:+.2f} | Expected ROI: {p.expected_roi:+.2f}%",
        ]
    
    if rec.risk_reward:
        r = rec.risk_reward
        lines += [
            "RISK/REWARD",
            f"  Win: ${r.profit_if_win:.2f} | Lose: ${r.loss_if_lose:.2f} | "
            f"Ratio: {r.risk_reward_ratio:.2f} ({r.reward_label})",
            f"  Edge: {r.edge_label} | {'Favorable' if r.is_favorable else 'Unfavorable'} bet",
        ]
    
    if rec.kelly:
        k = rec.kelly
        lines += [
            f"KELLY ({k.fraction_label})",
            f"  Stake: {k.kelly_percentage:.2f}% of ${k.bankroll:.2f} = ${k.recommended_bet:.2f}",
            f"  Advice: {k.advice_label}",
        ]
    
    if rec.stop_loss:
        s = rec.stop_loss
        lines += [
            f"STOP-LOSS ({s.stop_loss_percent:.0f}%)",
            f"  Entry: {s.entry_price:.4f} | Exit: {s.exit_price:.4f} | Max loss: ${s.max_loss:.2f}",
            f"  {s.risk_tier} risk ({s.risk_percent:.1f}%)" + (f" - {s.guidance}" if s.guidance else ""),
        ]
    
    if rec.portfolio:
        pf = rec.portfolio
        lines += [
            "PORTFOLIO",
            f"  Allocation: {pf.current_allocation_percent:.2f}% -> {pf.projected_allocation_percent:.2f}%",
            f"  If win: ${pf.portfolio_value_if_win:.2f} | If loss: ${pf.portfolio_value_if_loss:.2f} | "
            f"Expected: ${pf.projected_portfolio_value:.2f}",
            f"  {pf.risk_tier} risk ({pf.portfolio_risk_percent:.2f}%)" + (f" - {pf.guidance}" if pf.guidance else ""),
        ]
    
    for name, error in rec.errors.items():
        lines.append(f"{name.upper()} | unavailable: {error}")
    
    return "\n".join(lines)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Position sizing and risk analysis for a market signal")
    parser.add_argument("--probability", type=float, required=True, help="Model win probability (0-100)")
    parser.add_argument("--odds", type=float, required=True, help="Market-implied probability (0-100)")
    parser.add_argument("--investment", type=float, required=True, help="Amount to risk")
    parser.add_argument("--bankroll", type=float, default=None, help="Total portfolio value")
    parser.add_argument("--kelly-fraction", type=float, default=None, help="Fraction of full Kelly (0-1)")
    parser.add_argument("--stop-loss", type=float, default=None, help="Stop-loss percent below entry")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--log-file", default=None, help="Optional log file")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    
    engine = SizingEngine.from_defaults(SizingDefaults.from_env())
    
    try:
        request = engine.build_request(
            model_probability=args.probability,
            market_odds=args.odds,
            investment=args.investment,
            bankroll=args.bankroll,
            kelly_fraction=args.kelly_fraction,
            stop_loss_percent=args.stop_loss,
        )
    except SizingError as e:
        logger.error(f"Invalid input | {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2
    
    rec = engine.recommend(request)
    
    if args.json:
        print(rec.model_dump_json(indent=2))
    else:
        print(format_recommendation(rec))
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
