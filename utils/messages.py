"""
Centralized Japanese UI messages.
All user-facing text in Japanese for consistency.
"""

MESSAGES = {
    # Success messages
    'reservation_created': '予約を受け付けました',
    'reservation_updated': '予約を更新しました',
    'reservation_deleted': '予約を削除しました',
    'unavailable_date_set': '出張不可日を設定しました',
    'unavailable_date_deleted': '出張不可日を削除しました',
    'area_valid': '出張可能エリアです',
    'logout_success': 'ログアウトしました',

    # Admission errors
    'required_fields': '必須項目が入力されていません',
    'area_invalid': '申し訳ございません。ご指定のエリアは出張対応エリア外です。（対応エリア：東京都内、横浜市）',
    'date_unavailable': 'その日は出張対応できません。別の日付をお選びください。',
    'slot_full': 'その時間帯は既に予約が埋まっています。別の時間帯をお選びください。',
    'day_full': 'その日は既に予約が満員です。別の日付をお選びください。',
    'date_past': 'ご指定の日付は受付期間を過ぎています。{min_date}以降の日付をお選びください。',

    # Validation errors
    'invalid_date': '日付の形式が正しくありません（YYYY-MM-DD）',
    'invalid_time': '希望時間帯が正しくありません',
    'invalid_email': 'メールアドレスの形式が正しくありません',
    'invalid_logistics': '{field}は「あり」または「なし」で指定してください',
    'invalid_status': 'ステータスが正しくありません',
    'invalid_pagination': 'limit と offset は0以上の整数で指定してください',
    'year_month_required': 'year と month パラメータが必要です',
    'invalid_year_month': 'year または month の値が正しくありません',
    'date_required': '日付が必要です',
    'request_body_required': 'リクエスト本文が必要です',
    'invalid_field': '{field} の値が正しくありません',

    # Lookup / auth errors
    'reservation_not_found': '予約が見つかりません',
    'invalid_credentials': 'ユーザー名またはパスワードが間違っています',
    'not_found': 'リソースが見つかりません',
    'method_not_allowed': '許可されていないメソッドです',
    'internal_error': 'サーバーエラーが発生しました。しばらくしてから再度お試しください。',

    # Field labels
    'has_parking': '駐車場',
    'has_elevator': 'エレベーター',

    # Reservation statuses
    'status_pending': '予約受付',
    'status_confirmed': '確定',
    'status_completed': '完了',
    'status_cancelled': 'キャンセル',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
