from aiogram import Router, types

router = Router()


@router.callback_query()
async def stale_callback_handler(query: types.CallbackQuery) -> None:
    await query.answer("This screen is out of date. Send /start to see the current one.", show_alert=True)
