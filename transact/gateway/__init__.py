"""transact.gateway — CSV in, CSV out."""

from transact.gateway.parser import parse_transaction as parse_transaction
from transact.gateway.reader import load_transactions as load_transactions
from transact.gateway.reader import read_transactions as read_transactions
from transact.gateway.writer import write_accounts as write_accounts
