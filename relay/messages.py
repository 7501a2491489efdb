"""
User-facing texts.

Everything an end user (or admin caller) can read comes from here. Users
never see raw error text.
"""

# ── Behavioral Contract ───────────────────────────────────────────────────────
# System prompt sent with every completion: act as a fortune teller, listen
# kindly and give an appropriate reading.
SYSTEM_PROMPT = "あなたは占い師です。優しく悩みを聞き、適切な占い結果を伝えてください。"

# Sent in place of a reading when the completion call fails.
FALLBACK_READING = "申し訳ありませんが、占いができませんでした。"

# ── Chat replies ──────────────────────────────────────────────────────────────
DISCLOSURE_TEMPLATE = "あなたのUser IDは: {user_id} です。"
PAYMENT_REQUIRED = "このサービスを利用するには月額500円の支払いが必要です。"
ENTITLEMENT_GRANTED = "お支払いの確認が取れました。これで占いチャットを利用できます。"
ENTITLEMENT_REVOKED = "あなたの利用資格が取り消されました。再度利用するにはお支払いが必要です。"

# ── Admin API responses ───────────────────────────────────────────────────────
USER_ID_REQUIRED = "userIdが必要です"
USER_ADDED = "ユーザーを支払済みリストに追加しました。"
USER_REMOVED = "ユーザーを支払済みリストから削除しました。"
USER_NOT_FOUND = "このユーザーは支払済みリストに登録されていません。"

LIVENESS_TEXT = "✅ Server is running!"


def disclosure_message(user_id: str) -> str:
    return DISCLOSURE_TEMPLATE.format(user_id=user_id)
